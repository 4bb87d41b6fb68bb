from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import text

from ..common.datetime_utils import format_date, format_timestamp
from ..core.enums import AttachmentKind
from ..database.connection import DatabaseConnection
from ..database.profile import MeetingSource, SchemaProfile, meeting_source
from ..database.sql_base import db_session, fetchall, fetchone, where_clause
from .model import Attachment, Meeting, MeetingFilters, MeetingInput, StoredFile
from .repository import MeetingRepository

_ATTACHMENTS_SQL = """
    SELECT id, meeting_id, filename, type, original_name, file_size, created_at
    FROM meeting_files
    WHERE meeting_id = :id
    ORDER BY id
"""


def build_filter(filters: MeetingFilters, source: MeetingSource) -> tuple[list[str], dict[str, Any]]:
    """Predicate shared by the page query and the count query."""

    clauses: list[str] = []
    params: dict[str, Any] = {}

    if filters.project:
        clauses.append(f"{source.project} = :project")
        params["project"] = filters.project
    if filters.unit_type:
        clauses.append(f"{source.unit_type} = :unit_type")
        params["unit_type"] = filters.unit_type
    if filters.start_date:
        clauses.append("m.meeting_date >= :start_date")
        params["start_date"] = filters.start_date
    if filters.end_date:
        clauses.append("m.meeting_date <= :end_date")
        params["end_date"] = filters.end_date
    if filters.location:
        clauses.append("m.location LIKE :location")
        params["location"] = f"%{filters.location}%"

    return clauses, params


def _to_attachment(row: Dict[str, Any]) -> Attachment:
    return Attachment(
        attachment_id=int(row["id"]),
        meeting_id=int(row["meeting_id"]),
        filename=row["filename"],
        kind=AttachmentKind(row["type"]),
        original_name=row["original_name"],
        file_size=row.get("file_size"),
        created_at=format_timestamp(row.get("created_at")),
    )


class SqlMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection, profile: SchemaProfile):
        self._conn_factory = conn_factory
        self._profile = profile
        self._source = meeting_source(profile)

    def _select(self) -> str:
        unit_id = "m.unit_id" if self._profile.is_referential else "NULL"
        return f"""
            SELECT m.id, {self._source.project} AS project, {self._source.unit_type} AS unit_type,
                   {unit_id} AS unit_id, m.meeting_date, m.meeting_time, m.location,
                   m.participants_count, m.notes, m.created_by, m.created_at, m.updated_at,
                   a.name AS created_by_name
            FROM {self._source.from_clause}
            LEFT JOIN admins a ON a.id = m.created_by
        """

    @staticmethod
    def _to_meeting(row: Dict[str, Any], attachments: Sequence[Attachment] = ()) -> Meeting:
        return Meeting(
            meeting_id=int(row["id"]),
            project=str(row["project"]),
            unit_type=str(row["unit_type"]),
            unit_id=int(row["unit_id"]) if row.get("unit_id") is not None else None,
            meeting_date=format_date(row["meeting_date"]),
            meeting_time=row["meeting_time"],
            location=row.get("location") or "",
            participants_count=int(row.get("participants_count") or 0),
            notes=row.get("notes"),
            created_by=int(row["created_by"]),
            created_by_name=row.get("created_by_name"),
            created_at=format_timestamp(row.get("created_at")),
            updated_at=format_timestamp(row.get("updated_at")),
            attachments=tuple(attachments),
        )

    def list_page(self, *, filters: MeetingFilters, limit: int, offset: int) -> Sequence[Meeting]:
        clauses, params = build_filter(filters, self._source)
        sql = (
            self._select()
            + where_clause(clauses)
            + " ORDER BY m.meeting_date DESC, m.meeting_time DESC, m.id DESC LIMIT :limit OFFSET :offset"
        )
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(sql), {**params, "limit": int(limit), "offset": int(offset)})
            return [self._to_meeting(r) for r in fetchall(result)]

    def count(self, *, filters: MeetingFilters) -> int:
        clauses, params = build_filter(filters, self._source)
        sql = f"SELECT COUNT(*) FROM {self._source.from_clause}" + where_clause(clauses)
        with db_session(self._conn_factory) as conn:
            return int(conn.execute(text(sql), params).scalar_one())

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        with db_session(self._conn_factory) as conn:
            row = fetchone(conn.execute(text(self._select() + " WHERE m.id = :id"), {"id": int(meeting_id)}))
            if not row:
                return None
            files = fetchall(conn.execute(text(_ATTACHMENTS_SQL), {"id": int(meeting_id)}))
            return self._to_meeting(row, [_to_attachment(f) for f in files])

    def _write_params(self, data: MeetingInput) -> dict[str, Any]:
        params: dict[str, Any] = {
            "meeting_date": data.meeting_date,
            "meeting_time": data.meeting_time,
            "location": data.location,
            "participants_count": data.participants_count,
            "notes": data.notes,
        }
        if self._profile.is_referential:
            params["unit_id"] = data.unit_id
        else:
            params["project"] = data.project
            params["unit_type"] = data.unit_type
        return params

    def create(self, *, data: MeetingInput, created_by: int) -> int:
        params = self._write_params(data)
        params["created_by"] = int(created_by)
        cols = list(params)
        sql = f"INSERT INTO meetings ({', '.join(cols)}) VALUES ({', '.join(':' + c for c in cols)})"
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(sql), params)
            return int(result.lastrowid)

    def update(self, *, meeting_id: int, data: MeetingInput) -> bool:
        params = self._write_params(data)
        assignments = ", ".join(f"{c} = :{c}" for c in params)
        sql = f"UPDATE meetings SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = :id"
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(sql), {**params, "id": int(meeting_id)})
            return result.rowcount > 0

    def delete(self, *, meeting_id: int) -> bool:
        # meeting_files rows are left in place.
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text("DELETE FROM meetings WHERE id = :id"), {"id": int(meeting_id)})
            return result.rowcount > 0

    def add_attachments(self, *, meeting_id: int, files: Sequence[StoredFile]) -> None:
        if not files:
            return
        with db_session(self._conn_factory) as conn:
            conn.execute(
                text(
                    """
                    INSERT INTO meeting_files (meeting_id, filename, type, original_name, file_size)
                    VALUES (:meeting_id, :filename, :type, :original_name, :file_size)
                    """
                ),
                [
                    {
                        "meeting_id": int(meeting_id),
                        "filename": f.filename,
                        "type": f.kind.value,
                        "original_name": f.original_name,
                        "file_size": f.file_size,
                    }
                    for f in files
                ],
            )

    def list_attachments(self, *, meeting_id: int) -> Sequence[Attachment]:
        with db_session(self._conn_factory) as conn:
            result = conn.execute(text(_ATTACHMENTS_SQL), {"id": int(meeting_id)})
            return [_to_attachment(r) for r in fetchall(result)]
