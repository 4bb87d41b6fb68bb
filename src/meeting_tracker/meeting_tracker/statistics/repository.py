from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import GroupTotals
from .strategies.base import GroupingStrategy


class StatisticsRepository(Protocol):
    def group_totals(
        self,
        *,
        strategy: GroupingStrategy,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[GroupTotals]:
        """Meeting count and participant sum per group, ordered by the group keys.

        The date range is inclusive and applied only when both bounds are given.
        """

        raise NotImplementedError
