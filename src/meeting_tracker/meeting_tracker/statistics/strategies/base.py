from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...core.enums import GroupBy
from ...database.profile import MeetingSource
from ..model import GroupTotals, StatisticsRow, average


class GroupingStrategy(ABC):
    """Strategy Pattern: one grouping dimension of the statistics report."""

    group_by: GroupBy

    @abstractmethod
    def keys(self, source: MeetingSource) -> Sequence[tuple[str, str]]:
        """(SQL expression, alias) pairs to group and order by, alias in {project, unit_type}."""

        raise NotImplementedError

    @abstractmethod
    def to_row(self, totals: GroupTotals) -> StatisticsRow:
        raise NotImplementedError

    @staticmethod
    def _row(totals: GroupTotals, *, project: str, unit_label: str, unit_type) -> StatisticsRow:
        return StatisticsRow(
            project=project,
            unit_label=unit_label,
            unit_type=unit_type,
            meeting_count=totals.meeting_count,
            total_participants=totals.total_participants,
            avg_participants=average(totals.total_participants, totals.meeting_count),
        )
