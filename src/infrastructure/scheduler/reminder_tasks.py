from __future__ import annotations

import logging
from datetime import datetime

from src.application.interfaces.push_sender import PushSender
from src.application.notifications.delivery import DeliveryOptions
from src.application.use_cases.reminders import dispatch_due_reminders
from src.application.use_cases.reminders.dispatch_due_reminders import ReminderRunSummary
from src.config.settings import Settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.push.webpush import WebPushClient

logger = logging.getLogger(__name__)


def build_push_sender(settings: Settings) -> PushSender | None:
    if not settings.push_configured:
        logger.warning("VAPID credentials missing; push delivery disabled")
        return None
    return WebPushClient(
        vapid_private_key=settings.vapid_private_key.get_secret_value(),
        vapid_email=settings.vapid_email,
        ttl=settings.push_ttl_seconds,
        timeout=settings.push_timeout_seconds,
    )


def delivery_options(settings: Settings) -> DeliveryOptions:
    return DeliveryOptions(
        max_concurrency=settings.push_max_concurrency,
        timeout=settings.push_timeout_seconds,
        icon=settings.app_icon_path,
    )


async def run_daily_reminders(
    session_factory,
    push_sender: PushSender | None,
    settings: Settings,
    *,
    now: datetime | None = None,
) -> ReminderRunSummary:
    """Run the daily reminder scan in its own unit of work."""
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        return await dispatch_due_reminders.execute(
            uow,
            push_sender,
            options=delivery_options(settings),
            skip_already_sent=settings.reminder_skip_already_sent,
            deadline_seconds=settings.reminder_run_deadline_seconds,
            now=now,
        )
