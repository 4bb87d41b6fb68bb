from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import UnitType
from .model import Unit


class UnitRepository(Protocol):
    def list_all(self) -> Sequence[Unit]:
        """All units ordered by name."""

        raise NotImplementedError

    def get_by_id(self, unit_id: int) -> Optional[Unit]:
        raise NotImplementedError

    def create(self, *, name: str, unit_type: UnitType, project: str) -> int:
        raise NotImplementedError

    def update(self, *, unit_id: int, name: str, unit_type: UnitType, project: str) -> bool:
        raise NotImplementedError

    def delete(self, *, unit_id: int) -> bool:
        raise NotImplementedError
