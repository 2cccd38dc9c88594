from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from pywebpush import WebPushException, webpush

from src.application.errors import DeliveryError
from src.domain.models.push_subscription import PushSubscription

logger = logging.getLogger(__name__)


class WebPushClient:
    """Web Push sender signed with VAPID credentials.

    ``pywebpush`` is blocking, so each send runs in a worker thread.
    """

    def __init__(
        self,
        *,
        vapid_private_key: str,
        vapid_email: str,
        ttl: int = 86400,
        timeout: float = 10.0,
        urgency: str = "high",
    ) -> None:
        self.vapid_private_key = vapid_private_key
        self.vapid_subject = (
            vapid_email if vapid_email.startswith("mailto:") else f"mailto:{vapid_email}"
        )
        self.ttl = ttl
        self.timeout = timeout
        self.urgency = urgency

    def _send_blocking(self, subscription_info: dict[str, Any], data: str) -> None:
        webpush(
            subscription_info,
            data=data,
            vapid_private_key=self.vapid_private_key,
            # pywebpush adds aud/exp to the claims dict, so build a fresh one per call
            vapid_claims={"sub": self.vapid_subject},
            ttl=self.ttl,
            timeout=self.timeout,
            headers={"Urgency": self.urgency},
        )

    async def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        data = json.dumps(payload, ensure_ascii=False)
        try:
            await asyncio.to_thread(
                self._send_blocking, subscription.as_subscription_info(), data
            )
        except WebPushException as exc:
            response = getattr(exc, "response", None)
            status_code = getattr(response, "status_code", None)
            logger.warning(
                "Web push rejected: subscription=%s status=%s error=%s",
                subscription.id,
                status_code,
                exc,
            )
            raise DeliveryError(str(exc), upstream_status=status_code) from exc
        logger.debug("Web push delivered: subscription=%s", subscription.id)
