from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.application.interfaces.repositories.activities import ActivityWithAnimal
from src.domain.value_objects.activity_status import ActivityStatus
from src.domain.value_objects.animal_type import AnimalType


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class AnimalSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    animal_code: str
    animal_type: AnimalType


class ActivityCreate(BaseModel):
    farm_id: UUID
    animal_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    activity_date: date
    reminder_date: date | None = None
    status: ActivityStatus = ActivityStatus.PENDING

    @field_validator("reminder_date", mode="before")
    @classmethod
    def blank_reminder_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ActivityUpdate(BaseModel):
    """Partial edit. Only fields present in the request body are applied.

    ``reminder_date`` sent as null or an empty string removes the reminder.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    activity_date: date | None = None
    reminder_date: date | None = None
    status: ActivityStatus | None = None

    @field_validator("reminder_date", mode="before")
    @classmethod
    def blank_reminder_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ActivityStatusChange(BaseModel):
    status: ActivityStatus
    reminder_date: date | None = None

    @field_validator("reminder_date", mode="before")
    @classmethod
    def blank_reminder_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ActivityResponse(BaseModel):
    id: UUID
    farm_id: UUID
    animal_id: UUID
    title: str
    description: str | None = None
    activity_date: date
    reminder_date: date | None = None
    status: ActivityStatus
    created_by: UUID
    completed_by: UUID | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    animal: AnimalSummaryResponse

    @classmethod
    def from_result(cls, result: ActivityWithAnimal) -> ActivityResponse:
        activity = result.activity
        return cls(
            id=activity.id,
            farm_id=activity.farm_id,
            animal_id=activity.animal_id,
            title=activity.title,
            description=activity.description,
            activity_date=activity.activity_date,
            reminder_date=activity.reminder_date,
            status=activity.status,
            created_by=activity.created_by,
            completed_by=activity.completed_by,
            completed_at=activity.completed_at,
            created_at=activity.created_at,
            updated_at=activity.updated_at,
            animal=AnimalSummaryResponse.model_validate(result.animal),
        )


class ActivitiesListResponse(BaseModel):
    items: list[ActivityResponse]
    page: int
    limit: int
    total: int
