from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.notification import Notification


class NotificationRepository(Protocol):
    async def add(self, notification: Notification) -> Notification: ...

    async def list_by_user(
        self, user_id: UUID, *, limit: int = 50, offset: int = 0
    ) -> list[Notification]: ...

    async def count_by_user(self, user_id: UUID) -> int: ...
