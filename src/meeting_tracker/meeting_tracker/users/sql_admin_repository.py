from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import text

from ..common.datetime_utils import format_timestamp
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_session, fetchone
from .model import Admin
from .repository import AdminRepository


def _to_admin(row: Dict[str, Any]) -> Admin:
    return Admin(
        admin_id=int(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        name=row["name"],
        role=Role(row["role"]),
        created_at=format_timestamp(row.get("created_at")),
    )


class SqlAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    SELECT id, username, password_hash, name, role, created_at
                    FROM admins
                    WHERE id = :id
                    """
                ),
                {"id": int(admin_id)},
            )
            row = fetchone(result)
            return _to_admin(row) if row else None

    def get_by_username(self, username: str) -> Optional[Admin]:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    SELECT id, username, password_hash, name, role, created_at
                    FROM admins
                    WHERE username = :username
                    """
                ),
                {"username": username},
            )
            row = fetchone(result)
            return _to_admin(row) if row else None

    def update_name(self, admin_id: int, *, name: str) -> bool:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(
                text("UPDATE admins SET name = :name WHERE id = :id"),
                {"id": int(admin_id), "name": name},
            )
            return result.rowcount > 0

    def update_password_hash(self, admin_id: int, *, password_hash: str) -> bool:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(
                text("UPDATE admins SET password_hash = :password_hash WHERE id = :id"),
                {"id": int(admin_id), "password_hash": password_hash},
            )
            return result.rowcount > 0
