from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.notification import Notification


@dataclass(slots=True)
class NotificationHistory:
    items: list[Notification]
    total: int
    limit: int
    offset: int


async def execute(
    uow: UnitOfWork, profile_id: UUID, *, limit: int = 50, offset: int = 0
) -> NotificationHistory:
    if limit <= 0 or limit > 100:
        raise ValidationError("limit must be between 1 and 100")
    if offset < 0:
        raise ValidationError("offset must be 0 or greater")
    items = await uow.notifications.list_by_user(profile_id, limit=limit, offset=offset)
    total = await uow.notifications.count_by_user(profile_id)
    return NotificationHistory(items=items, total=total, limit=limit, offset=offset)
