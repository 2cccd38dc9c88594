from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

DEFAULT_FARM_NAME = "ฟาร์มของฉัน"
DEFAULT_PROVINCE = "ไม่ระบุ"


def new_farm_code() -> str:
    # epoch millis plus a three-digit random tail
    return f"FM{int(time.time() * 1000)}{secrets.randbelow(1000):03d}"


@dataclass(slots=True)
class Farm:
    id: UUID
    owner_id: UUID
    farm_name: str
    province: str
    farm_code: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        owner_id: UUID,
        farm_name: str = DEFAULT_FARM_NAME,
        province: str = DEFAULT_PROVINCE,
        farm_code: str | None = None,
    ) -> Farm:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            owner_id=owner_id,
            farm_name=farm_name,
            province=province,
            farm_code=farm_code or new_farm_code(),
            created_at=now,
            updated_at=now,
        )
