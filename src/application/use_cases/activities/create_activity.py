from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.repositories.activities import ActivityWithAnimal
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.activities.common import (
    animal_summary,
    clean_description,
    clean_title,
    sync_reminder,
)
from src.application.use_cases.farms.access import accessible_farm_ids
from src.domain.models.activity import Activity, InvalidStatusTransition, ReminderAfterActivity
from src.domain.value_objects.activity_status import ActivityStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateActivityInput:
    farm_id: UUID
    animal_id: UUID
    title: str
    activity_date: date
    description: str | None = None
    reminder_date: date | None = None
    status: ActivityStatus = ActivityStatus.PENDING


async def execute(
    uow: UnitOfWork, profile_id: UUID, payload: CreateActivityInput
) -> ActivityWithAnimal:
    title = clean_title(payload.title)
    description = clean_description(payload.description)

    if payload.farm_id not in await accessible_farm_ids(uow, profile_id):
        raise NotFound("Animal not found or access denied")
    animal = await uow.animals.get([payload.farm_id], payload.animal_id)
    if not animal:
        raise NotFound("Animal not found or access denied")

    try:
        activity = Activity.create(
            farm_id=payload.farm_id,
            animal_id=animal.id,
            title=title,
            activity_date=payload.activity_date,
            created_by=profile_id,
            description=description,
            reminder_date=payload.reminder_date,
            status=payload.status,
        )
    except (ReminderAfterActivity, InvalidStatusTransition) as exc:
        raise ValidationError(str(exc)) from exc

    created = await uow.activities.add(activity)
    if created.reminder_date is not None:
        await sync_reminder(uow, created, created.reminder_date)
    await uow.commit()
    logger.info(
        "Activity created: id=%s animal=%s activity_date=%s reminder_date=%s",
        created.id,
        animal.id,
        created.activity_date,
        created.reminder_date,
    )
    return ActivityWithAnimal(activity=created, animal=animal_summary(animal))
