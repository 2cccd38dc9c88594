from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from src.domain.models.animal import Animal
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType


@dataclass(slots=True)
class AnimalFilters:
    farm_id: UUID | None = None
    animal_type: AnimalType | None = None
    status: AnimalStatus | None = AnimalStatus.ACTIVE
    search: str | None = None


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, farm_ids: list[UUID], animal_id: UUID) -> Animal | None: ...

    async def code_exists(
        self, farm_id: UUID, animal_code: str, *, exclude_animal_id: UUID | None = None
    ) -> bool: ...

    async def list_codes_with_prefix(self, farm_id: UUID, prefix: str) -> list[str]: ...

    async def list(
        self,
        farm_ids: list[UUID],
        filters: AnimalFilters,
        *,
        sort_by: str = "created_at",
        sort_dir: str = "desc",
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Animal], int]: ...

    async def update(self, animal_id: UUID, data: dict) -> Animal | None: ...
