"""Read-only consistency report.

Unit and meeting deletes do not cascade, and an attachment file is written
before its metadata row. This module finds what those gaps leave behind; it
never repairs anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from sqlalchemy import text

from .connection import DatabaseConnection
from .profile import SchemaProfile


@dataclass(frozen=True)
class IntegrityReport:
    meetings_with_missing_unit: list[int] = field(default_factory=list)
    attachments_with_missing_meeting: list[int] = field(default_factory=list)
    unreferenced_files: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.meetings_with_missing_unit or self.attachments_with_missing_meeting or self.unreferenced_files)

    def to_dict(self) -> dict:
        return {
            "meetings_with_missing_unit": self.meetings_with_missing_unit,
            "attachments_with_missing_meeting": self.attachments_with_missing_meeting,
            "unreferenced_files": self.unreferenced_files,
            "is_clean": self.is_clean,
        }


def check_integrity(
    conn_factory: DatabaseConnection,
    profile: SchemaProfile,
    *,
    stored_files: Iterable[str] = (),
) -> IntegrityReport:
    with conn_factory.connect() as conn:
        missing_unit: list[int] = []
        if profile.is_referential:
            rows = conn.execute(
                text(
                    """
                    SELECT m.id FROM meetings m
                    LEFT JOIN units u ON u.id = m.unit_id
                    WHERE u.id IS NULL
                    ORDER BY m.id
                    """
                )
            ).all()
            missing_unit = [int(r[0]) for r in rows]

        rows = conn.execute(
            text(
                """
                SELECT f.id FROM meeting_files f
                LEFT JOIN meetings m ON m.id = f.meeting_id
                WHERE m.id IS NULL
                ORDER BY f.id
                """
            )
        ).all()
        missing_meeting = [int(r[0]) for r in rows]

        known = {r[0] for r in conn.execute(text("SELECT filename FROM meeting_files")).all()}

    unreferenced = sorted(name for name in stored_files if name not in known)
    return IntegrityReport(
        meetings_with_missing_unit=missing_unit,
        attachments_with_missing_meeting=missing_meeting,
        unreferenced_files=unreferenced,
    )
