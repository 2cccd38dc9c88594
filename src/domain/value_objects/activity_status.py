from __future__ import annotations

from enum import Enum


class ActivityStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    # Display label only; never assigned automatically.
    OVERDUE = "OVERDUE"

    @property
    def is_closed(self) -> bool:
        return self in {ActivityStatus.COMPLETED, ActivityStatus.CANCELLED}


ALLOWED_TRANSITIONS: dict[ActivityStatus, frozenset[ActivityStatus]] = {
    ActivityStatus.PENDING: frozenset(
        {ActivityStatus.COMPLETED, ActivityStatus.CANCELLED, ActivityStatus.OVERDUE}
    ),
    ActivityStatus.OVERDUE: frozenset(
        {ActivityStatus.PENDING, ActivityStatus.COMPLETED, ActivityStatus.CANCELLED}
    ),
    ActivityStatus.COMPLETED: frozenset({ActivityStatus.PENDING}),
    ActivityStatus.CANCELLED: frozenset({ActivityStatus.PENDING}),
}
