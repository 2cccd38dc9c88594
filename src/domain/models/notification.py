from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.notification_type import NotificationType


@dataclass(slots=True)
class Notification:
    id: UUID
    user_id: UUID
    farm_id: UUID
    type: NotificationType
    title: str
    message: str
    activity_id: UUID | None = None
    push_sent: bool = False
    push_sent_at: datetime | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        user_id: UUID,
        farm_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        activity_id: UUID | None = None,
        push_sent: bool = False,
        now: datetime | None = None,
    ) -> Notification:
        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            user_id=user_id,
            farm_id=farm_id,
            type=type,
            title=title,
            message=message,
            activity_id=activity_id,
            push_sent=push_sent,
            push_sent_at=now if push_sent else None,
            is_read=False,
            created_at=now,
        )
