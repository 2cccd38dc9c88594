from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.activity import Activity
from src.domain.value_objects.activity_status import ActivityStatus
from src.domain.value_objects.animal_type import AnimalType


@dataclass(slots=True, frozen=True)
class AnimalSummary:
    id: UUID
    name: str
    animal_code: str
    animal_type: AnimalType


@dataclass(slots=True)
class ActivityWithAnimal:
    activity: Activity
    animal: AnimalSummary


@dataclass(slots=True)
class ActivityFilters:
    farm_id: UUID | None = None
    animal_id: UUID | None = None
    status: ActivityStatus | None = None
    date_from: date | None = None
    date_to: date | None = None
    has_reminder: bool | None = None


class ActivityRepository(Protocol):
    async def add(self, activity: Activity) -> Activity: ...

    async def get(self, farm_ids: list[UUID], activity_id: UUID) -> Activity | None: ...

    async def get_with_animal(
        self, farm_ids: list[UUID], activity_id: UUID
    ) -> ActivityWithAnimal | None: ...

    async def save(self, activity: Activity) -> Activity: ...

    async def delete(self, activity_id: UUID) -> bool: ...

    async def list(
        self,
        farm_ids: list[UUID],
        filters: ActivityFilters,
        *,
        sort_by: str = "created_at",
        sort_dir: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[ActivityWithAnimal], int]: ...

    async def list_pending_with_reminder_between(
        self, farm_ids: list[UUID], start: date, end: date
    ) -> list[ActivityWithAnimal]: ...
