from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import GroupBy
from .strategies.base import GroupingStrategy
from .strategies.by_project import ByProjectStrategy
from .strategies.by_project_and_unit import ByProjectAndUnitStrategy
from .strategies.by_unit import ByUnitStrategy


@dataclass
class GroupingStrategyFactory:
    """Factory Pattern: pick the grouping strategy for a group_by mode."""

    def for_mode(self, group_by: GroupBy) -> GroupingStrategy:
        if group_by == GroupBy.BY_PROJECT:
            return ByProjectStrategy()
        if group_by == GroupBy.BY_PROJECT_AND_UNIT:
            return ByProjectAndUnitStrategy()
        return ByUnitStrategy()
