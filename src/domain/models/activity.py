from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.activity_status import ALLOWED_TRANSITIONS, ActivityStatus


class InvalidStatusTransition(ValueError):
    def __init__(self, current: ActivityStatus, requested: ActivityStatus) -> None:
        super().__init__(f"Cannot change status from {current.value} to {requested.value}")
        self.current = current
        self.requested = requested


class ReminderAfterActivity(ValueError):
    def __init__(self) -> None:
        super().__init__("Reminder date must be before or equal to activity date")


def ensure_reminder_not_after(reminder_date: date | None, activity_date: date) -> None:
    if reminder_date is not None and reminder_date > activity_date:
        raise ReminderAfterActivity()


@dataclass(slots=True)
class Activity:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    title: str
    activity_date: date
    created_by: UUID
    description: str | None = None
    reminder_date: date | None = None
    status: ActivityStatus = ActivityStatus.PENDING
    completed_by: UUID | None = None
    completed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        title: str,
        activity_date: date,
        created_by: UUID,
        description: str | None = None,
        reminder_date: date | None = None,
        status: ActivityStatus = ActivityStatus.PENDING,
    ) -> Activity:
        ensure_reminder_not_after(reminder_date, activity_date)
        now = datetime.now(timezone.utc)
        activity = cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            title=title,
            activity_date=activity_date,
            created_by=created_by,
            description=description,
            reminder_date=reminder_date,
            status=ActivityStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        if status is not ActivityStatus.PENDING:
            activity.change_status(status, actor_id=created_by, now=now)
        return activity

    def change_status(
        self, new_status: ActivityStatus, *, actor_id: UUID, now: datetime | None = None
    ) -> bool:
        """Apply a status transition. Returns False when the status is unchanged.

        Closing (COMPLETED/CANCELLED) records the completer; any other target clears it.
        """
        if new_status is self.status:
            return False
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransition(self.status, new_status)
        now = now or datetime.now(timezone.utc)
        self.status = new_status
        if new_status.is_closed:
            self.completed_at = now
            self.completed_by = actor_id
        else:
            self.completed_at = None
            self.completed_by = None
        self.updated_at = now
        return True
