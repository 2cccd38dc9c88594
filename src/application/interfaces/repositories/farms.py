from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from src.domain.models.farm import Farm
from src.domain.models.membership import Membership
from src.domain.value_objects.role import Role


@dataclass(slots=True, frozen=True)
class FarmStats:
    animals: int
    activities: int
    members: int


class FarmRepository(Protocol):
    async def add(self, farm: Farm) -> Farm: ...

    async def get(self, farm_id: UUID) -> Farm | None: ...

    async def list_owned(self, owner_id: UUID) -> list[Farm]: ...

    async def add_member(self, membership: Membership) -> None: ...

    async def list_memberships(self, user_id: UUID) -> list[Membership]: ...

    async def get_role(self, user_id: UUID, farm_id: UUID) -> Role | None: ...

    async def stats(self, farm_id: UUID) -> FarmStats: ...
