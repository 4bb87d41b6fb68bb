from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import text

from ..common.datetime_utils import format_timestamp
from ..core.enums import UnitType
from ..database.connection import DatabaseConnection
from ..database.profile import SchemaProfile
from ..database.sql_base import db_session, fetchall, fetchone
from .model import Unit
from .repository import UnitRepository


def _unit_type(value: str) -> UnitType | str:
    # Legacy rows may carry types outside the current enumeration.
    try:
        return UnitType(value)
    except ValueError:
        return value


class SqlUnitRepository(UnitRepository):
    def __init__(self, conn_factory: DatabaseConnection, profile: SchemaProfile):
        self._conn_factory = conn_factory
        self._has_region = profile.units_has_legacy_region

    def _columns(self) -> str:
        cols = "id, name, type, project, created_at"
        return cols + ", district" if self._has_region else cols

    def _to_unit(self, row: Dict[str, Any]) -> Unit:
        return Unit(
            unit_id=int(row["id"]),
            name=row["name"],
            unit_type=_unit_type(row["type"]),
            project=str(row["project"]),
            created_at=format_timestamp(row.get("created_at")),
            legacy_region=row.get("district") if self._has_region else None,
        )

    def list_all(self) -> Sequence[Unit]:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(f"SELECT {self._columns()} FROM units ORDER BY name, id"))
            return [self._to_unit(r) for r in fetchall(result)]

    def get_by_id(self, unit_id: int) -> Optional[Unit]:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(f"SELECT {self._columns()} FROM units WHERE id = :id"), {"id": int(unit_id)})
            row = fetchone(result)
            return self._to_unit(row) if row else None

    def create(self, *, name: str, unit_type: UnitType, project: str) -> int:
        params = {"name": name, "type": unit_type.value, "project": project}
        if self._has_region:
            sql = "INSERT INTO units (name, type, project, district) VALUES (:name, :type, :project, '')"
        else:
            sql = "INSERT INTO units (name, type, project) VALUES (:name, :type, :project)"
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(sql), params)
            return int(result.lastrowid)

    def update(self, *, unit_id: int, name: str, unit_type: UnitType, project: str) -> bool:
        if self._has_region:
            sql = """
                UPDATE units SET name = :name, type = :type, project = :project, district = COALESCE(district, '')
                WHERE id = :id
            """
        else:
            sql = "UPDATE units SET name = :name, type = :type, project = :project WHERE id = :id"
        with db_session(self._conn_factory) as conn:
            result = conn.execute(
                text(sql),
                {"id": int(unit_id), "name": name, "type": unit_type.value, "project": project},
            )
            return result.rowcount > 0

    def delete(self, *, unit_id: int) -> bool:
        # No check for meetings referencing this unit.
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text("DELETE FROM units WHERE id = :id"), {"id": int(unit_id)})
            return result.rowcount > 0
