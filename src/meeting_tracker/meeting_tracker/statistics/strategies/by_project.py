from __future__ import annotations

from typing import Sequence

from ...core.enums import GroupBy
from ...database.profile import MeetingSource
from ..model import GroupTotals, StatisticsRow
from .base import GroupingStrategy


class ByProjectStrategy(GroupingStrategy):
    """One row per project; unit columns left empty."""

    group_by = GroupBy.BY_PROJECT

    def keys(self, source: MeetingSource) -> Sequence[tuple[str, str]]:
        return [(source.project, "project")]

    def to_row(self, totals: GroupTotals) -> StatisticsRow:
        return self._row(totals, project=totals.project or "", unit_label="", unit_type=None)
