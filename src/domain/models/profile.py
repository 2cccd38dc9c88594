from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Profile:
    id: UUID
    external_user_id: str
    first_name: str
    last_name: str = ""
    phone_number: str | None = None
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        external_user_id: str,
        first_name: str = "User",
        last_name: str = "",
        phone_number: str | None = None,
        avatar_url: str | None = None,
    ) -> Profile:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            external_user_id=external_user_id,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            avatar_url=avatar_url,
            created_at=now,
            updated_at=now,
        )
