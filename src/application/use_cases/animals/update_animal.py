from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import accessible_farm_ids, ensure_can_update_animals
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_status import AnimalStatus, Sex


@dataclass(slots=True)
class UpdateAnimalInput:
    name: str | None = None
    sex: Sex | None = None
    birth_date: date | None = None
    color: str | None = None
    weight_kg: int | None = None
    height_cm: int | None = None
    mother_name: str | None = None
    father_name: str | None = None
    image_url: str | None = None
    status: AnimalStatus | None = None


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    animal_id: UUID,
    payload: UpdateAnimalInput,
) -> Animal:
    farm_ids = await accessible_farm_ids(uow, profile_id)
    existing = await uow.animals.get(farm_ids, animal_id)
    if not existing:
        raise NotFound("Animal not found or access denied")
    await ensure_can_update_animals(uow, profile_id, existing.farm_id)

    data: dict = {}
    for field_name in (
        "name",
        "sex",
        "birth_date",
        "color",
        "weight_kg",
        "height_cm",
        "mother_name",
        "father_name",
        "image_url",
        "status",
    ):
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if "name" in data:
        data["name"] = data["name"].strip()
        if not data["name"] or len(data["name"]) > 100:
            raise ValidationError("Animal name must be between 1 and 100 characters")
    if not data:
        return existing
    updated = await uow.animals.update(animal_id, data)
    if not updated:
        raise NotFound("Animal not found or access denied")
    await uow.commit()
    return updated
