from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import text

from ..database.connection import DatabaseConnection
from ..database.profile import SchemaProfile, meeting_source
from ..database.sql_base import db_session, fetchall, where_clause
from .model import GroupTotals
from .repository import StatisticsRepository
from .strategies.base import GroupingStrategy


class SqlStatisticsRepository(StatisticsRepository):
    def __init__(self, conn_factory: DatabaseConnection, profile: SchemaProfile):
        self._conn_factory = conn_factory
        self._source = meeting_source(profile)

    def group_totals(
        self,
        *,
        strategy: GroupingStrategy,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[GroupTotals]:
        keys = strategy.keys(self._source)
        clauses: list[str] = []
        params: dict[str, Any] = {}
        if start_date and end_date:
            clauses.append("m.meeting_date BETWEEN :start_date AND :end_date")
            params.update(start_date=start_date, end_date=end_date)

        select_keys = ", ".join(f"{expr} AS {alias}" for expr, alias in keys)
        group_exprs = ", ".join(expr for expr, _ in keys)
        sql = (
            f"SELECT {select_keys}, COUNT(m.id) AS meeting_count, "
            f"COALESCE(SUM(COALESCE(m.participants_count, 0)), 0) AS total_participants "
            f"FROM {self._source.from_clause}"
            + where_clause(clauses)
            + f" GROUP BY {group_exprs} ORDER BY {group_exprs}"
        )

        with db_session(self._conn_factory) as conn:
            rows = fetchall(conn.execute(text(sql), params))

        return [
            GroupTotals(
                project=str(r["project"]) if r.get("project") is not None else None,
                unit_type=str(r["unit_type"]) if r.get("unit_type") is not None else None,
                meeting_count=int(r["meeting_count"]),
                total_participants=int(r["total_participants"] or 0),
            )
            for r in rows
        ]
