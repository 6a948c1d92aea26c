"""Core data schema for time-ledger records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from timeledger.clock import duration_hours, to_slot


@dataclass(frozen=True)
class TimeLog:
    """One recorded block of time, immutable once created."""

    id: str
    user_id: str
    date: date
    start_time: str
    end_time: str
    activity_type_id: str
    satisfaction_tag_id: str
    details: str = ""
    created_at: Optional[datetime] = None
    duration: float = field(init=False)

    def __post_init__(self) -> None:
        if to_slot(self.start_time) >= to_slot(self.end_time):
            raise ValueError(f"Log {self.id}: start {self.start_time} must be earlier than end {self.end_time}")
        object.__setattr__(self, "duration", duration_hours(self.start_time, self.end_time))


@dataclass(frozen=True)
class ActivityType:
    id: str
    name: str
    color: str
    is_visible: bool = True
    order: int = 1


@dataclass(frozen=True)
class SatisfactionTag:
    id: str
    name: str
    color: str
    score: int = 0
    emoji: str = ""
    is_visible: bool = True
    order: int = 1

    @property
    def is_happy(self) -> bool:
        return self.score == 1


DEFAULT_ACTIVITY_TYPES = (
    ActivityType("act_1", "Daily Projects", "#3B82F6", True, 1),
    ActivityType("act_2", "Life & Family", "#10B981", True, 2),
    ActivityType("act_3", "Long-term Investment", "#8B5CF6", True, 3),
)

DEFAULT_SATISFACTION_TAGS = (
    SatisfactionTag("sat_1", "Happy", "#FBBF24", score=1, emoji="\U0001F60A", order=1),
    SatisfactionTag("sat_2", "OK", "#9CA3AF", score=0, emoji="\U0001F610", order=2),
    SatisfactionTag("sat_3", "Not so good", "#EF4444", score=-1, emoji="\U0001F61E", order=3),
)


def in_display_order(items):
    """Visible catalog items sorted by ``order``, ties broken by ``id``."""

    return sorted((item for item in items if item.is_visible), key=lambda item: (item.order, item.id))
