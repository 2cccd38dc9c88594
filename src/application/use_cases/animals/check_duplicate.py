from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import owned_farm_ids


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    farm_id: UUID,
    animal_code: str,
    *,
    exclude_animal_id: UUID | None = None,
) -> bool:
    animal_code = (animal_code or "").strip()
    if not animal_code:
        raise ValidationError("Animal ID and Farm ID are required")
    if farm_id not in await owned_farm_ids(uow, profile_id):
        raise NotFound("Farm not found or access denied")
    return await uow.animals.code_exists(
        farm_id, animal_code, exclude_animal_id=exclude_animal_id
    )
