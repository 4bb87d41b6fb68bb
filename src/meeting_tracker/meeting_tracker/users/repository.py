from __future__ import annotations

from typing import Optional, Protocol

from .model import Admin


class AdminRepository(Protocol):
    """Repository interface for Admin.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Admin]:
        raise NotImplementedError

    def update_name(self, admin_id: int, *, name: str) -> bool:
        raise NotImplementedError

    def update_password_hash(self, admin_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError
