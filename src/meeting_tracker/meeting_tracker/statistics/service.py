from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import optional_iso_date
from ..core.enums import GroupBy
from ..core.exceptions import ValidationError
from .factory import GroupingStrategyFactory
from .model import StatisticsRow
from .repository import StatisticsRepository


def parse_group_by(value: Any) -> GroupBy:
    if value is None or not str(value).strip():
        return GroupBy.BY_UNIT
    try:
        return GroupBy(str(value).strip())
    except ValueError:
        # Unknown modes are a 400, never a silent by_unit fallback.
        allowed = ", ".join(g.value for g in GroupBy)
        raise ValidationError(f"Invalid group_by {value!r} (expected one of: {allowed})")


class StatisticsService:
    """Use case: attendance summary grouped by project, unit type, or both."""

    def __init__(
        self,
        statistics: StatisticsRepository,
        *,
        factory: Optional[GroupingStrategyFactory] = None,
    ):
        self._statistics = statistics
        self._factory = factory or GroupingStrategyFactory()

    def summarize(
        self,
        *,
        start_date: Any = None,
        end_date: Any = None,
        group_by: Any = None,
    ) -> Sequence[StatisticsRow]:
        mode = parse_group_by(group_by)
        start = optional_iso_date(start_date, "start_date")
        end = optional_iso_date(end_date, "end_date")
        if not (start and end):
            # A half-open range is ignored rather than guessed at.
            start = end = None

        strategy = self._factory.for_mode(mode)
        totals = self._statistics.group_totals(strategy=strategy, start_date=start, end_date=end)
        return [strategy.to_row(t) for t in totals]
