from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from src.application.errors import ConflictError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import ensure_can_manage_animals
from src.domain.models.animal import Animal
from src.domain.value_objects import animal_code as codes
from src.domain.value_objects.animal_status import Sex
from src.domain.value_objects.animal_type import AnimalType
from src.utils.datetime_tz import utc_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateAnimalInput:
    farm_id: UUID
    animal_type: AnimalType
    name: str
    animal_code: str | None = None
    sex: Sex | None = None
    birth_date: date | None = None
    color: str | None = None
    weight_kg: int | None = None
    height_cm: int | None = None
    mother_name: str | None = None
    father_name: str | None = None
    image_url: str | None = None


def validated_code(code: str, animal_type: AnimalType) -> str:
    code = code.strip()
    try:
        codes.validate(code, animal_type)
    except codes.InvalidAnimalCode as exc:
        raise ValidationError(exc.message, details={"segment": exc.segment}) from exc
    return code


async def next_code(
    uow: UnitOfWork, farm_id: UUID, animal_type: AnimalType, *, now: datetime | None = None
) -> str:
    today = utc_today(now)
    prefix = codes.code_prefix(animal_type, today)
    existing = await uow.animals.list_codes_with_prefix(farm_id, prefix)
    try:
        return codes.generate(animal_type, existing, today)
    except codes.SequenceExhausted as exc:
        raise ConflictError(
            "Daily animal ID sequence exhausted", details={"prefix": exc.prefix}
        ) from exc


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    payload: CreateAnimalInput,
    *,
    now: datetime | None = None,
) -> Animal:
    name = (payload.name or "").strip()
    if not name or len(name) > 100:
        raise ValidationError("Animal name must be between 1 and 100 characters")
    await ensure_can_manage_animals(uow, profile_id, payload.farm_id)

    if payload.animal_code:
        code = validated_code(payload.animal_code, payload.animal_type)
        if await uow.animals.code_exists(payload.farm_id, code):
            raise ConflictError("Animal ID already exists in this farm")
    else:
        code = await next_code(uow, payload.farm_id, payload.animal_type, now=now)

    animal = Animal.create(
        farm_id=payload.farm_id,
        animal_code=code,
        animal_type=payload.animal_type,
        name=name,
        sex=payload.sex,
        birth_date=payload.birth_date,
        color=payload.color,
        weight_kg=payload.weight_kg,
        height_cm=payload.height_cm,
        mother_name=payload.mother_name,
        father_name=payload.father_name,
        image_url=payload.image_url,
    )
    created = await uow.animals.add(animal)
    await uow.commit()
    logger.info(
        "Animal created: id=%s farm=%s code=%s type=%s",
        created.id,
        created.farm_id,
        created.animal_code,
        created.animal_type.value,
    )
    return created
