from __future__ import annotations

import logging
from datetime import date, datetime
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.repositories.activities import ActivityWithAnimal
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.activities.common import (
    load_activity,
    purge_future_reminders,
    sync_reminder,
)
from src.domain.models.activity import (
    InvalidStatusTransition,
    ReminderAfterActivity,
    ensure_reminder_not_after,
)
from src.domain.value_objects.activity_status import ActivityStatus
from src.utils.datetime_tz import utc_now, utc_today

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    activity_id: UUID,
    status: ActivityStatus,
    *,
    reminder_date: date | None = None,
    now: datetime | None = None,
) -> ActivityWithAnimal:
    """Move an activity to ``status``.

    Closing purges reminders due today or later. Reopening to PENDING with a
    ``reminder_date`` reschedules the reminder (creating it when the close purged it)
    and makes it dispatch-eligible again.
    """
    now = now or utc_now()
    found = await load_activity(uow, profile_id, activity_id)
    activity = found.activity

    if reminder_date is not None:
        if status is not ActivityStatus.PENDING:
            raise ValidationError("A reminder date can only be given when reopening an activity")
        try:
            ensure_reminder_not_after(reminder_date, activity.activity_date)
        except ReminderAfterActivity as exc:
            raise ValidationError(str(exc)) from exc

    try:
        changed = activity.change_status(status, actor_id=profile_id, now=now)
    except InvalidStatusTransition as exc:
        raise ValidationError(str(exc)) from exc
    if not changed and reminder_date is None:
        return found

    purged = 0
    if changed and status.is_closed:
        purged = await purge_future_reminders(uow, activity.id, utc_today(now))
    if reminder_date is not None:
        activity.reminder_date = reminder_date
        activity.updated_at = now
        await sync_reminder(uow, activity, reminder_date, reset_sent=True)

    saved = await uow.activities.save(activity)
    await uow.commit()
    logger.info(
        "Activity %s status=%s by=%s purged_reminders=%s",
        saved.id,
        saved.status.value,
        profile_id,
        purged,
    )
    return ActivityWithAnimal(activity=saved, animal=found.animal)
