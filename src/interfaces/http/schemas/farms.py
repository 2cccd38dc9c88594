from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FarmCreate(BaseModel):
    farm_name: str = Field(..., min_length=1, max_length=100)
    province: str = Field(..., min_length=1, max_length=50)


class FarmResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    farm_name: str
    province: str
    farm_code: str | None = None
    created_at: datetime
    updated_at: datetime


class FarmOverviewResponse(FarmResponse):
    animals_count: int = 0
    activities_count: int = 0
    members_count: int = 0


class FarmsListResponse(BaseModel):
    items: list[FarmOverviewResponse]
