from __future__ import annotations

from typing import Sequence

from ...core.enums import GroupBy
from ...database.profile import MeetingSource
from ..model import GroupTotals, StatisticsRow
from .base import GroupingStrategy


class ByUnitStrategy(GroupingStrategy):
    """One row per unit type across all projects.

    Meetings carry the unit *type*, not a named unit, so two groups called
    "A" and "B" are reported together under ``group``.
    """

    group_by = GroupBy.BY_UNIT

    def keys(self, source: MeetingSource) -> Sequence[tuple[str, str]]:
        return [(source.unit_type, "unit_type")]

    def to_row(self, totals: GroupTotals) -> StatisticsRow:
        return self._row(totals, project="", unit_label=totals.unit_type or "", unit_type=totals.unit_type)
