from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class PushSubscription:
    id: UUID
    user_id: UUID
    endpoint: str
    p256dh_key: str
    auth_key: str
    is_active: bool = True
    last_used_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls, user_id: UUID, endpoint: str, p256dh_key: str, auth_key: str
    ) -> PushSubscription:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            user_id=user_id,
            endpoint=endpoint,
            p256dh_key=p256dh_key,
            auth_key=auth_key,
            is_active=True,
            last_used_at=now,
            created_at=now,
            updated_at=now,
        )

    def as_subscription_info(self) -> dict:
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh_key, "auth": self.auth_key},
        }
