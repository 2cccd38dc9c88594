from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Request

from src.application.errors import AuthError, PermissionDenied
from src.application.interfaces.push_sender import PushSender
from src.application.use_cases.reminders import dispatch_due_reminders
from src.config.settings import Settings
from src.infrastructure.scheduler.reminder_tasks import delivery_options
from src.interfaces.http.deps import get_app_settings, get_push_sender, get_uow
from src.interfaces.http.schemas.notifications import ReminderRunResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"])


def require_cron_secret(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> None:
    if settings.cron_secret is None or not settings.cron_secret.get_secret_value():
        logger.error("Reminder trigger called but CRON_SECRET is not configured")
        raise AuthError("Unauthorized")
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    expected = settings.cron_secret.get_secret_value()
    if scheme.lower() != "bearer" or not hmac.compare_digest(token.encode(), expected.encode()):
        logger.warning("Rejected reminder trigger from %s", request.client)
        raise AuthError("Unauthorized")


async def _run(uow, sender: PushSender | None, settings: Settings) -> ReminderRunResponse:
    summary = await dispatch_due_reminders.execute(
        uow,
        sender,
        options=delivery_options(settings),
        skip_already_sent=settings.reminder_skip_already_sent,
        deadline_seconds=settings.reminder_run_deadline_seconds,
    )
    return ReminderRunResponse(**summary.to_dict())


@router.get(
    "/reminders",
    response_model=ReminderRunResponse,
    dependencies=[Depends(require_cron_secret)],
)
async def run_reminders(
    uow=Depends(get_uow),
    sender: PushSender | None = Depends(get_push_sender),
    settings: Settings = Depends(get_app_settings),
) -> ReminderRunResponse:
    return await _run(uow, sender, settings)


@router.post(
    "/reminders",
    response_model=ReminderRunResponse,
    dependencies=[Depends(require_cron_secret)],
)
async def trigger_reminders(
    uow=Depends(get_uow),
    sender: PushSender | None = Depends(get_push_sender),
    settings: Settings = Depends(get_app_settings),
) -> ReminderRunResponse:
    """Manual trigger for testing; disabled in production."""
    if settings.is_production:
        raise PermissionDenied("Manual trigger is not available in production")
    return await _run(uow, sender, settings)
