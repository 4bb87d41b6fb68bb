"""Table definitions for the current schema.

DDL only: queries are written as plain SQL in the repositories. Dialect
specifics (AUTOINCREMENT vs AUTO_INCREMENT, etc.) are left to SQLAlchemy so the
same migrations run on MySQL and SQLite.
"""

from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, MetaData, String, Table, Text, func

metadata = MetaData()

admins = Table(
    "admins",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(64), unique=True, nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("name", String(100), nullable=False),
    Column("role", String(20), nullable=False, server_default="admin"),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

units = Table(
    "units",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("type", String(20), nullable=False),
    Column("project", String(32), nullable=False, server_default="1"),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)


def _meeting_columns() -> list[Column]:
    return [
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("project", String(32), nullable=False),
        Column("unit_type", String(20), nullable=False),
        Column("meeting_date", Date, nullable=False),
        Column("meeting_time", String(5), nullable=False),
        Column("location", String(255), nullable=False, server_default=""),
        Column("participants_count", Integer, server_default="0"),
        Column("notes", Text),
        Column("created_by", Integer, ForeignKey("admins.id"), nullable=False),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
        Column("updated_at", DateTime, server_default=func.current_timestamp()),
    ]


meetings = Table("meetings", metadata, *_meeting_columns())

# Build target for the referential -> denormalized table swap.
meetings_new = Table("meetings_new", metadata, *_meeting_columns())

# meeting_id is not a foreign key: deleting a meeting leaves its file rows behind.
meeting_files = Table(
    "meeting_files",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("meeting_id", Integer, nullable=False, index=True),
    Column("filename", String(255), nullable=False),
    Column("type", String(10), nullable=False),
    Column("original_name", String(255), nullable=False),
    Column("file_size", Integer),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

schema_version = Table(
    "schema_version",
    metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("name", String(64), nullable=False),
    Column("applied_at", DateTime, server_default=func.current_timestamp()),
)

MEETING_COLUMNS = [c.name for c in meetings.columns if c.name != "id"]
