from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.repositories.activities import (
    ActivityFilters,
    ActivityWithAnimal,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import accessible_farm_ids
from src.domain.models.animal import Animal
from src.domain.value_objects.activity_status import ActivityStatus


@dataclass(slots=True)
class AnimalDetail:
    animal: Animal
    pending_activities: list[ActivityWithAnimal] = field(default_factory=list)
    activities_count: int = 0


async def execute(uow: UnitOfWork, profile_id: UUID, animal_id: UUID) -> AnimalDetail:
    farm_ids = await accessible_farm_ids(uow, profile_id)
    animal = await uow.animals.get(farm_ids, animal_id)
    if not animal:
        raise NotFound("Animal not found or access denied")
    pending, _ = await uow.activities.list(
        [animal.farm_id],
        ActivityFilters(animal_id=animal.id, status=ActivityStatus.PENDING),
        sort_by="activity_date",
        sort_dir="asc",
        limit=100,
    )
    _, total = await uow.activities.list(
        [animal.farm_id], ActivityFilters(animal_id=animal.id), limit=1
    )
    return AnimalDetail(animal=animal, pending_activities=pending, activities_count=total)
