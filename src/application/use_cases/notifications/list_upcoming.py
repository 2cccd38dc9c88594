from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID

from src.application.interfaces.repositories.activities import AnimalSummary
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.factory import reminder_message
from src.application.use_cases.farms.access import owned_farm_ids
from src.domain.value_objects.activity_status import ActivityStatus
from src.utils.datetime_tz import utc_today

UPCOMING_WINDOW_DAYS = 7


@dataclass(slots=True, frozen=True)
class FeedItem:
    id: UUID
    title: str
    message: str
    activity_date: date
    reminder_date: date
    status: ActivityStatus
    animal: AnimalSummary
    is_read: bool = False
    type: str = "reminder"


async def execute(
    uow: UnitOfWork, profile_id: UUID, *, now: datetime | None = None
) -> list[FeedItem]:
    """Pending activities of the caller's farms with a reminder in the next week.

    Read-only; ordered by reminder date ascending.
    """
    farm_ids = await owned_farm_ids(uow, profile_id)
    if not farm_ids:
        return []
    today = utc_today(now)
    # date-only reminders: window is [today, today + 7], today included
    rows = await uow.activities.list_pending_with_reminder_between(
        farm_ids, today, today + timedelta(days=UPCOMING_WINDOW_DAYS)
    )
    items = [
        FeedItem(
            id=row.activity.id,
            title=row.activity.title,
            message=reminder_message(row.animal.name, row.activity.title),
            activity_date=row.activity.activity_date,
            reminder_date=row.activity.reminder_date,
            status=row.activity.status,
            animal=row.animal,
        )
        for row in rows
        if row.activity.reminder_date is not None
    ]
    return sorted(items, key=lambda item: item.reminder_date)
