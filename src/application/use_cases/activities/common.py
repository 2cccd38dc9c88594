from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.repositories.activities import ActivityWithAnimal, AnimalSummary
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import accessible_farm_ids
from src.domain.models.activity import Activity
from src.domain.models.activity_reminder import ActivityReminder
from src.domain.models.animal import Animal

ACTIVITY_NOT_FOUND = "Activity not found or access denied"
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Marks an input field the caller did not send; None means "clear it".
UNSET: Any = _Unset()


def animal_summary(animal: Animal) -> AnimalSummary:
    return AnimalSummary(
        id=animal.id,
        name=animal.name,
        animal_code=animal.animal_code,
        animal_type=animal.animal_type,
    )


def clean_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Activity title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Activity title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    description = description.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Activity description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description or None


async def load_activity(
    uow: UnitOfWork, profile_id: UUID, activity_id: UUID
) -> ActivityWithAnimal:
    farm_ids = await accessible_farm_ids(uow, profile_id)
    found = await uow.activities.get_with_animal(farm_ids, activity_id) if farm_ids else None
    if not found:
        raise NotFound(ACTIVITY_NOT_FOUND)
    return found


async def sync_reminder(
    uow: UnitOfWork, activity: Activity, reminder_date: date | None, *, reset_sent: bool = False
) -> None:
    """Make the stored reminder match ``reminder_date``; None removes it.

    A changed date (or ``reset_sent``) makes the reminder dispatch-eligible again.
    """
    if reminder_date is None:
        await uow.reminders.delete_for_activity(activity.id)
        return
    existing = await uow.reminders.get_by_activity(activity.id)
    if existing is None:
        await uow.reminders.upsert(
            ActivityReminder.create(activity.id, activity.farm_id, reminder_date)
        )
        return
    if reset_sent or existing.reminder_date != reminder_date:
        existing.reschedule(reminder_date)
        await uow.reminders.upsert(existing)


async def purge_future_reminders(uow: UnitOfWork, activity_id: UUID, today: date) -> int:
    return await uow.reminders.delete_for_activity(activity_id, on_or_after=today)
