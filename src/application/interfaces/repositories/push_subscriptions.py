from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.models.push_subscription import PushSubscription


class PushSubscriptionRepository(Protocol):
    async def upsert(
        self, *, user_id: UUID, endpoint: str, p256dh_key: str, auth_key: str
    ) -> PushSubscription: ...

    async def list_active_for_user(self, user_id: UUID) -> list[PushSubscription]: ...

    async def deactivate_for_user(self, user_id: UUID, *, endpoint: str | None = None) -> int: ...

    async def deactivate(self, subscription_ids: list[UUID]) -> int: ...

    async def touch_last_used(self, subscription_ids: list[UUID], used_at: datetime) -> int: ...
