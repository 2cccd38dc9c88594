from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlparse
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.push_sender import PushSender
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.delivery import DeliveryOptions, deliver_to_subscriptions
from src.application.notifications.factory import build_welcome_payload
from src.domain.models.push_subscription import PushSubscription

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubscribeInput:
    endpoint: str
    p256dh: str
    auth: str


def validate_subscription(payload: SubscribeInput) -> SubscribeInput:
    endpoint = (payload.endpoint or "").strip()
    parsed = urlparse(endpoint)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValidationError("Invalid subscription data", details={"field": "endpoint"})
    p256dh = (payload.p256dh or "").strip()
    auth = (payload.auth or "").strip()
    if not p256dh or not auth:
        raise ValidationError("Invalid subscription data", details={"field": "keys"})
    return SubscribeInput(endpoint=endpoint, p256dh=p256dh, auth=auth)


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    payload: SubscribeInput,
    *,
    sender: PushSender | None,
    options: DeliveryOptions = DeliveryOptions(),
) -> PushSubscription:
    """Register (or reactivate) a browser endpoint, then greet it with a welcome push.

    The welcome push is best-effort: its failure is logged and the subscription stands.
    """
    payload = validate_subscription(payload)
    subscription = await uow.push_subscriptions.upsert(
        user_id=profile_id,
        endpoint=payload.endpoint,
        p256dh_key=payload.p256dh,
        auth_key=payload.auth,
    )
    await uow.commit()
    logger.info("Push subscription saved: id=%s user=%s", subscription.id, profile_id)

    report = await deliver_to_subscriptions(
        sender,
        [subscription],
        build_welcome_payload(icon=options.icon).to_dict(),
        max_concurrency=1,
        timeout=options.timeout,
    )
    for failure in report.failures:
        logger.warning(
            "Welcome notification failed: subscription=%s status=%s error=%s",
            failure.subscription_id,
            failure.status_code,
            failure.error,
        )
    return subscription
