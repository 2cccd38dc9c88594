from __future__ import annotations

from datetime import datetime
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.animals.create_animal import next_code
from src.application.use_cases.farms.access import ensure_can_manage_animals, owned_farm_ids
from src.domain.value_objects.animal_type import AnimalType


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    animal_type: AnimalType,
    *,
    farm_id: UUID | None = None,
    now: datetime | None = None,
) -> str:
    """Preview the code the next animal of ``animal_type`` would get today.

    Without ``farm_id`` the caller's first owned farm is used.
    """
    if farm_id is None:
        farm_ids = await owned_farm_ids(uow, profile_id)
        if not farm_ids:
            raise NotFound("No farm found for user")
        farm_id = farm_ids[0]
    else:
        await ensure_can_manage_animals(uow, profile_id, farm_id)
    return await next_code(uow, farm_id, animal_type, now=now)
