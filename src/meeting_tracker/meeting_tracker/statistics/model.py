from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GroupTotals:
    """Raw per-group aggregates as read from storage."""

    project: Optional[str]
    unit_type: Optional[str]
    meeting_count: int
    total_participants: int


def average(total: int, count: int) -> float:
    if count <= 0:
        return 0.0
    return total / count


@dataclass(frozen=True)
class StatisticsRow:
    project: str
    unit_label: str
    unit_type: Optional[str]
    meeting_count: int
    total_participants: int
    avg_participants: float

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "unit_label": self.unit_label,
            "unit_type": self.unit_type,
            "meeting_count": self.meeting_count,
            "total_participants": self.total_participants,
            "avg_participants": self.avg_participants,
        }
