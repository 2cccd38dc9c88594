from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from uuid import UUID, uuid4

DEFAULT_REMINDER_TIME = time(6, 0)


@dataclass(slots=True)
class ActivityReminder:
    id: UUID
    activity_id: UUID
    farm_id: UUID
    reminder_date: date
    reminder_time: time = DEFAULT_REMINDER_TIME
    notification_sent: bool = False
    sent_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        activity_id: UUID,
        farm_id: UUID,
        reminder_date: date,
        reminder_time: time = DEFAULT_REMINDER_TIME,
    ) -> ActivityReminder:
        return cls(
            id=uuid4(),
            activity_id=activity_id,
            farm_id=farm_id,
            reminder_date=reminder_date,
            reminder_time=reminder_time,
            notification_sent=False,
            sent_at=None,
            created_at=datetime.now(timezone.utc),
        )

    def reschedule(self, reminder_date: date) -> None:
        self.reminder_date = reminder_date
        self.notification_sent = False
        self.sent_at = None

    def mark_sent(self, now: datetime | None = None) -> None:
        self.notification_sent = True
        self.sent_at = now or datetime.now(timezone.utc)
