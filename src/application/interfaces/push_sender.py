from __future__ import annotations

from typing import Any, Protocol

from src.domain.models.push_subscription import PushSubscription


class PushSender(Protocol):
    """Delivers one payload to one subscription.

    Raises DeliveryError on failure; ``upstream_status`` 404/410 marks the endpoint as gone.
    """

    async def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None: ...
