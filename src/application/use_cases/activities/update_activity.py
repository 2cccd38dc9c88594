from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.repositories.activities import ActivityWithAnimal
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.activities.common import (
    UNSET,
    clean_description,
    clean_title,
    load_activity,
    purge_future_reminders,
    sync_reminder,
)
from src.domain.models.activity import (
    InvalidStatusTransition,
    ReminderAfterActivity,
    ensure_reminder_not_after,
)
from src.utils.datetime_tz import utc_now, utc_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateActivityInput:
    """Fields left as ``UNSET`` are not touched. ``reminder_date=None`` removes the reminder."""

    title: Any = UNSET
    description: Any = UNSET
    activity_date: Any = UNSET
    reminder_date: Any = UNSET
    status: Any = UNSET


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    activity_id: UUID,
    payload: UpdateActivityInput,
    *,
    now: datetime | None = None,
) -> ActivityWithAnimal:
    now = now or utc_now()
    found = await load_activity(uow, profile_id, activity_id)
    activity = found.activity

    title = clean_title(payload.title) if payload.title is not UNSET else UNSET
    description = (
        clean_description(payload.description) if payload.description is not UNSET else UNSET
    )
    if payload.activity_date is None:
        raise ValidationError("Activity date is required")
    activity_date: date = (
        payload.activity_date if payload.activity_date is not UNSET else activity.activity_date
    )
    reminder_date: date | None = (
        payload.reminder_date if payload.reminder_date is not UNSET else activity.reminder_date
    )
    try:
        ensure_reminder_not_after(reminder_date, activity_date)
    except ReminderAfterActivity as exc:
        raise ValidationError(str(exc)) from exc

    status_changed = False
    reopened = False
    if payload.status is not UNSET and payload.status is not None:
        previous = activity.status
        try:
            status_changed = activity.change_status(payload.status, actor_id=profile_id, now=now)
        except InvalidStatusTransition as exc:
            raise ValidationError(str(exc)) from exc
        reopened = status_changed and previous.is_closed

    if title is not UNSET:
        activity.title = title
    if description is not UNSET:
        activity.description = description
    activity.activity_date = activity_date
    activity.reminder_date = reminder_date
    activity.updated_at = now

    if payload.reminder_date is not UNSET:
        await sync_reminder(uow, activity, reminder_date, reset_sent=reopened)
    if status_changed and activity.status.is_closed:
        await purge_future_reminders(uow, activity.id, utc_today(now))

    saved = await uow.activities.save(activity)
    await uow.commit()
    if status_changed:
        logger.info(
            "Activity %s status changed to %s by %s", saved.id, saved.status.value, profile_id
        )
    return ActivityWithAnimal(activity=saved, animal=found.animal)
