from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.profile import Profile


class ProfileRepository(Protocol):
    async def add(self, profile: Profile) -> Profile: ...

    async def get(self, profile_id: UUID) -> Profile | None: ...

    async def get_by_external_id(self, external_user_id: str) -> Profile | None: ...
