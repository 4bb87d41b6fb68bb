from __future__ import annotations

from typing import Sequence

from ...core.enums import GroupBy
from ...database.profile import MeetingSource
from ..model import GroupTotals, StatisticsRow
from .base import GroupingStrategy


class ByProjectAndUnitStrategy(GroupingStrategy):
    """One row per (project, unit type) pair."""

    group_by = GroupBy.BY_PROJECT_AND_UNIT

    def keys(self, source: MeetingSource) -> Sequence[tuple[str, str]]:
        return [(source.project, "project"), (source.unit_type, "unit_type")]

    def to_row(self, totals: GroupTotals) -> StatisticsRow:
        return self._row(
            totals,
            project=totals.project or "",
            unit_label=totals.unit_type or "",
            unit_type=totals.unit_type,
        )
