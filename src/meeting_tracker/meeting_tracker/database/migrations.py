"""Forward-only schema migrations.

Each step re-inspects the live tables before touching anything, so a step is
safe to re-run after a crash and safe against databases that were upgraded by
hand before ``schema_version`` existed. Steps that already have a row in
``schema_version`` are skipped.

The meetings table swap is not atomic on every backend (MySQL commits DDL
implicitly). A failed step is logged and left unrecorded so the next startup
retries it; the remaining steps do not depend on it and still run. The
application starts with whatever shape is in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..core.constants import DEFAULT_PROJECT, DEFAULT_UNIT_TYPE
from ..core.enums import MeetingShape
from .connection import DatabaseConnection
from .profile import SchemaProfile
from .schema import MEETING_COLUMNS, admins, meeting_files, meetings, meetings_new, schema_version, units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    apply: Callable[[Connection], None]


def _tables(conn: Connection) -> set[str]:
    return set(inspect(conn).get_table_names())


def _columns(conn: Connection, table: str) -> set[str]:
    return {c["name"] for c in inspect(conn).get_columns(table)}


def _create_core_tables(conn: Connection) -> None:
    admins.create(conn, checkfirst=True)
    units.create(conn, checkfirst=True)


def _add_units_project_column(conn: Connection) -> None:
    if "project" in _columns(conn, "units"):
        return
    conn.execute(
        text(f"ALTER TABLE units ADD COLUMN project VARCHAR(32) NOT NULL DEFAULT '{DEFAULT_PROJECT}'")
    )
    logger.info("Added units.project (existing rows default to %r)", DEFAULT_PROJECT)


def _copy_expressions(old_columns: set[str]) -> dict[str, str]:
    has_unit_ref = "unit_id" in old_columns

    if "project" in old_columns:
        project = f"COALESCE(m.project, '{DEFAULT_PROJECT}')"
    elif has_unit_ref:
        project = f"COALESCE(u.project, '{DEFAULT_PROJECT}')"
    else:
        project = f"'{DEFAULT_PROJECT}'"

    if "unit_type" in old_columns:
        unit_type = f"COALESCE(m.unit_type, '{DEFAULT_UNIT_TYPE}')"
    elif has_unit_ref:
        unit_type = f"COALESCE(u.type, '{DEFAULT_UNIT_TYPE}')"
    else:
        unit_type = f"'{DEFAULT_UNIT_TYPE}'"

    fallbacks = {
        "location": "''",
        "participants_count": "0",
        "notes": "NULL",
        "created_by": "1",
        "created_at": "CURRENT_TIMESTAMP",
        "updated_at": "CURRENT_TIMESTAMP",
    }
    exprs = {"project": project, "unit_type": unit_type}
    for col in MEETING_COLUMNS:
        if col in exprs:
            continue
        if col in old_columns:
            if col in ("location", "participants_count"):
                exprs[col] = f"COALESCE(m.{col}, {fallbacks[col]})"
            else:
                exprs[col] = f"m.{col}"
        else:
            exprs[col] = fallbacks[col]
    return exprs


def _denormalize_meetings(conn: Connection) -> None:
    tables = _tables(conn)

    if "meetings" not in tables:
        if "meetings_new" in tables:
            # Previous run died between DROP and RENAME.
            conn.execute(text("ALTER TABLE meetings_new RENAME TO meetings"))
            logger.warning("Recovered meetings table from leftover meetings_new")
            return
        meetings.create(conn)
        return

    old_columns = _columns(conn, "meetings")
    if {"project", "unit_type"} <= old_columns:
        return

    if "meetings_new" in tables:
        conn.execute(text("DROP TABLE meetings_new"))
        logger.warning("Dropped stale meetings_new left by an interrupted migration")

    logger.info("Migrating meetings table to the denormalized shape")
    meetings_new.create(conn)

    exprs = _copy_expressions(old_columns)
    join = " LEFT JOIN units u ON u.id = m.unit_id" if "unit_id" in old_columns else ""
    # Ids are kept so existing meeting_files rows still point at their meeting.
    target_cols = ["id"] + list(exprs)
    select_exprs = ["m.id"] + [exprs[c] for c in exprs]
    result = conn.execute(
        text(
            f"INSERT INTO meetings_new ({', '.join(target_cols)}) "
            f"SELECT {', '.join(select_exprs)} FROM meetings m{join}"
        )
    )
    copied = result.rowcount

    conn.execute(text("DROP TABLE meetings"))
    conn.execute(text("ALTER TABLE meetings_new RENAME TO meetings"))
    logger.info("meetings table migrated (%s rows copied)", copied)


def _create_meeting_files(conn: Connection) -> None:
    meeting_files.create(conn, checkfirst=True)


MIGRATIONS: Sequence[Migration] = (
    Migration(1, "core_tables", _create_core_tables),
    Migration(2, "units_project_column", _add_units_project_column),
    Migration(3, "denormalized_meetings", _denormalize_meetings),
    Migration(4, "meeting_files_table", _create_meeting_files),
)


def _applied_versions(conn_factory: DatabaseConnection) -> set[int]:
    with conn_factory.connect() as conn:
        schema_version.create(conn, checkfirst=True)
        rows = conn.execute(text("SELECT version FROM schema_version")).all()
        return {int(r[0]) for r in rows}


def _record(conn_factory: DatabaseConnection, step: Migration) -> None:
    with conn_factory.connect() as conn:
        conn.execute(
            text("INSERT INTO schema_version (version, name) VALUES (:version, :name)"),
            {"version": step.version, "name": step.name},
        )


def resolve_profile(conn_factory: DatabaseConnection, *, version: int) -> SchemaProfile:
    with conn_factory.connect() as conn:
        tables = _tables(conn)
        meeting_cols = _columns(conn, "meetings") if "meetings" in tables else set()
        unit_cols = _columns(conn, "units") if "units" in tables else set()

    if {"project", "unit_type"} <= meeting_cols or "unit_id" not in meeting_cols:
        shape = MeetingShape.DENORMALIZED
    else:
        shape = MeetingShape.REFERENTIAL

    return SchemaProfile(
        version=version,
        meeting_shape=shape,
        units_has_legacy_region="district" in unit_cols,
    )


def _contiguous_version(applied: set[int]) -> int:
    # A step applied after a failed one does not advance the reported version.
    version = 0
    while version + 1 in applied:
        version += 1
    return version


def run_migrations(
    conn_factory: DatabaseConnection,
    *,
    migrations: Sequence[Migration] = MIGRATIONS,
) -> SchemaProfile:
    """Bring the schema up to date and describe the resulting shape.

    Never raises for database errors: failures are logged and the returned
    profile reflects the shape actually present.
    """

    try:
        applied = _applied_versions(conn_factory)
    except SQLAlchemyError:
        logger.exception("Could not read schema_version; skipping migrations")
        applied = set()
        migrations = ()

    for step in migrations:
        if step.version in applied:
            continue
        try:
            with conn_factory.connect() as conn:
                step.apply(conn)
            _record(conn_factory, step)
        except SQLAlchemyError:
            logger.exception(
                "Schema migration %03d_%s failed; continuing with the current schema", step.version, step.name
            )
            continue
        applied.add(step.version)
        logger.info("Applied schema migration %03d_%s", step.version, step.name)

    version = _contiguous_version(applied)
    try:
        return resolve_profile(conn_factory, version=version)
    except SQLAlchemyError:
        logger.exception("Could not inspect schema; assuming the denormalized meeting shape")
        return SchemaProfile(version=version, meeting_shape=MeetingShape.DENORMALIZED)
