from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from src.application.errors import InfrastructureError
from src.application.interfaces.push_sender import PushSender
from src.application.interfaces.repositories.activity_reminders import DueReminder
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.delivery import (
    DeliveryOptions,
    apply_delivery_outcomes,
    deliver_to_subscriptions,
)
from src.application.notifications.factory import build_reminder_payload
from src.domain.models.notification import Notification
from src.domain.value_objects.notification_type import NotificationType
from src.utils.datetime_tz import utc_now, utc_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReminderRunSummary:
    success: bool
    timestamp: datetime
    total_activities: int = 0
    notifications_sent: int = 0
    notifications_failed: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)
    partial: bool = False
    skipped: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
            "totalActivities": self.total_activities,
            "notificationsSent": self.notifications_sent,
            "notificationsFailed": self.notifications_failed,
            "errors": self.errors,
            "partial": self.partial,
            "skipped": self.skipped,
        }


async def _notify_owner(
    uow: UnitOfWork,
    sender: PushSender | None,
    due: DueReminder,
    *,
    options: DeliveryOptions,
    mark_sent: bool,
    now: datetime,
    errors: list[dict[str, Any]],
) -> int:
    activity = due.activity
    subscriptions = await uow.push_subscriptions.list_active_for_user(due.owner_id)
    payload = build_reminder_payload(
        activity_id=activity.id,
        activity_title=activity.title,
        animal_name=due.animal.name,
        animal_code=due.animal.animal_code,
        icon=options.icon,
    )
    report = await deliver_to_subscriptions(
        sender,
        subscriptions,
        payload.to_dict(),
        max_concurrency=options.max_concurrency,
        timeout=options.timeout,
    )
    await apply_delivery_outcomes(uow, report, now=now)
    for failure in report.failures:
        errors.append(
            {
                "activityId": str(activity.id),
                "subscriptionId": str(failure.subscription_id),
                "error": failure.error,
                "statusCode": failure.status_code,
            }
        )

    await uow.notifications.add(
        Notification.create(
            user_id=due.owner_id,
            farm_id=activity.farm_id,
            type=NotificationType.REMINDER,
            title=payload.title,
            message=payload.body,
            activity_id=activity.id,
            push_sent=report.reached > 0,
            now=now,
        )
    )
    if mark_sent:
        await uow.reminders.mark_sent(due.reminder.id, now)
    logger.info(
        "Reminder for activity=%s owner=%s reached=%s/%s devices",
        activity.id,
        due.owner_id,
        report.reached,
        len(subscriptions),
    )
    return report.reached


async def execute(
    uow: UnitOfWork,
    sender: PushSender | None,
    *,
    options: DeliveryOptions = DeliveryOptions(),
    skip_already_sent: bool = True,
    deadline_seconds: float | None = None,
    now: datetime | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> ReminderRunSummary:
    """Notify farm owners about pending activities whose reminder falls on today (UTC).

    Every scanned activity gets exactly one audit Notification. Delivery failures are
    collected in the summary and never abort the run; only failing to load the due
    reminders raises. With ``skip_already_sent`` the reminder is marked sent after its
    audit row, so a same-day re-run sends nothing new.
    """
    now = now or utc_now()
    today = utc_today(now)
    logger.info("Reminder run started for %s (skip_already_sent=%s)", today, skip_already_sent)
    try:
        due_reminders = await uow.reminders.list_due(today, skip_sent=skip_already_sent)
    except Exception as exc:
        logger.error("Failed to load due reminders: %s", exc, exc_info=True)
        raise InfrastructureError("Failed to load due reminders") from exc

    summary = ReminderRunSummary(
        success=True, timestamp=now, total_activities=len(due_reminders)
    )
    started = clock()
    for index, due in enumerate(due_reminders):
        if deadline_seconds is not None and clock() - started >= deadline_seconds:
            summary.partial = True
            summary.skipped = len(due_reminders) - index
            logger.warning(
                "Reminder run deadline of %ss reached; %s activities not started",
                deadline_seconds,
                summary.skipped,
            )
            break
        try:
            reached = await _notify_owner(
                uow,
                sender,
                due,
                options=options,
                mark_sent=skip_already_sent,
                now=now,
                errors=summary.errors,
            )
            await uow.commit()
        except Exception as exc:
            await uow.rollback()
            summary.notifications_failed += 1
            summary.errors.append(
                {
                    "activityId": str(due.activity.id),
                    "subscriptionId": None,
                    "error": str(exc) or repr(exc),
                    "statusCode": None,
                }
            )
            logger.error(
                "Reminder processing failed for activity=%s: %s",
                due.activity.id,
                exc,
                exc_info=True,
            )
            continue
        if reached > 0:
            summary.notifications_sent += 1
        else:
            summary.notifications_failed += 1

    logger.info(
        "Reminder run finished: total=%s sent=%s failed=%s errors=%s partial=%s skipped=%s",
        summary.total_activities,
        summary.notifications_sent,
        summary.notifications_failed,
        len(summary.errors),
        summary.partial,
        summary.skipped,
    )
    return summary
