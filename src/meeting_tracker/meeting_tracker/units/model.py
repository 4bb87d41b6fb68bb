from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import UnitType


@dataclass(frozen=True)
class Unit:
    """Domain entity: an organizational unit under a numbered project."""

    unit_id: int
    name: str
    unit_type: UnitType | str
    project: str
    created_at: Optional[str] = None
    legacy_region: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.unit_id,
            "name": self.name,
            "type": self.unit_type.value if isinstance(self.unit_type, UnitType) else self.unit_type,
            "project": self.project,
            "created_at": self.created_at,
        }
        if self.legacy_region is not None:
            data["legacy_region"] = self.legacy_region
        return data
