from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.value_objects.animal_status import AnimalStatus, Sex
from src.domain.value_objects.animal_type import AnimalType
from src.interfaces.http.schemas.activities import ActivityResponse


class AnimalCreate(BaseModel):
    farm_id: UUID
    animal_type: AnimalType
    name: str = Field(..., min_length=1, max_length=100)
    # Generated when omitted
    animal_code: str | None = Field(None, max_length=13)
    sex: Sex | None = None
    birth_date: date | None = None
    color: str | None = Field(None, max_length=50)
    weight_kg: int | None = Field(None, ge=0)
    height_cm: int | None = Field(None, ge=0)
    mother_name: str | None = Field(None, max_length=100)
    father_name: str | None = Field(None, max_length=100)
    image_url: str | None = Field(None, max_length=500)


class AnimalUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    sex: Sex | None = None
    birth_date: date | None = None
    color: str | None = Field(None, max_length=50)
    weight_kg: int | None = Field(None, ge=0)
    height_cm: int | None = Field(None, ge=0)
    mother_name: str | None = Field(None, max_length=100)
    father_name: str | None = Field(None, max_length=100)
    image_url: str | None = Field(None, max_length=500)
    status: AnimalStatus | None = None


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    status: AnimalStatus
    created_at: datetime
    updated_at: datetime


class AnimalDetailResponse(AnimalResponse):
    pending_activities: list[ActivityResponse] = Field(default_factory=list)
    activities_count: int = 0


class AnimalsListResponse(BaseModel):
    items: list[AnimalResponse]
    page: int
    limit: int
    total: int


class GenerateCodeRequest(BaseModel):
    animal_type: AnimalType
    farm_id: UUID | None = None


class GenerateCodeResponse(BaseModel):
    animal_code: str


class CheckDuplicateRequest(BaseModel):
    farm_id: UUID
    animal_code: str = Field(..., min_length=1, max_length=13)
    exclude_animal_id: UUID | None = None


class CheckDuplicateResponse(BaseModel):
    is_duplicate: bool
