from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_PROJECT, DEFAULT_UNIT_TYPE
from ..core.enums import MeetingShape


@dataclass(frozen=True)
class SchemaProfile:
    """Storage shape resolved once at startup and shared read-only by repositories."""

    version: int
    meeting_shape: MeetingShape
    units_has_legacy_region: bool = False

    @property
    def is_referential(self) -> bool:
        return self.meeting_shape == MeetingShape.REFERENTIAL


@dataclass(frozen=True)
class MeetingSource:
    """FROM clause plus the SQL expressions yielding a meeting's project and unit type.

    Meetings are always aliased ``m``.
    """

    from_clause: str
    project: str
    unit_type: str


def meeting_source(profile: SchemaProfile) -> MeetingSource:
    if profile.is_referential:
        return MeetingSource(
            from_clause="meetings m LEFT JOIN units u ON u.id = m.unit_id",
            project=f"COALESCE(u.project, '{DEFAULT_PROJECT}')",
            unit_type=f"COALESCE(u.type, '{DEFAULT_UNIT_TYPE}')",
        )
    return MeetingSource(from_clause="meetings m", project="m.project", unit_type="m.unit_type")
