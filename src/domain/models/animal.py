from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.animal_status import AnimalStatus, Sex
from src.domain.value_objects.animal_type import AnimalType


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    animal_code: str
    animal_type: AnimalType
    name: str
    sex: Sex | None = None
    birth_date: date | None = None
    color: str | None = None
    weight_kg: int | None = None
    height_cm: int | None = None
    mother_name: str | None = None
    father_name: str | None = None
    image_url: str | None = None
    status: AnimalStatus = AnimalStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_code: str,
        animal_type: AnimalType,
        name: str,
        sex: Sex | None = None,
        birth_date: date | None = None,
        color: str | None = None,
        weight_kg: int | None = None,
        height_cm: int | None = None,
        mother_name: str | None = None,
        father_name: str | None = None,
        image_url: str | None = None,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_code=animal_code,
            animal_type=animal_type,
            name=name,
            sex=sex,
            birth_date=birth_date,
            color=color,
            weight_kg=weight_kg,
            height_cm=height_cm,
            mother_name=mother_name,
            father_name=father_name,
            image_url=image_url,
            status=AnimalStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
