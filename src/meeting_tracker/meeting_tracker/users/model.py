from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Admin:
    """Domain entity: an administrator account.

    Note: Plain data object, no database access here.
    """

    admin_id: int
    username: str
    password_hash: str
    name: str
    role: Role
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.admin_id,
            "username": self.username,
            "name": self.name,
            "role": self.role.value,
            "created_at": self.created_at,
        }
