from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.application.use_cases.farms import create_farm, list_farms
from src.application.use_cases.farms.create_farm import CreateFarmInput
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_uow
from src.interfaces.http.schemas.farms import (
    FarmCreate,
    FarmOverviewResponse,
    FarmResponse,
    FarmsListResponse,
)

router = APIRouter(prefix="/farms", tags=["farms"])


@router.get("", response_model=FarmsListResponse)
async def list_farms_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FarmsListResponse:
    overviews = await list_farms.execute(uow, context.profile_id)
    items = [
        FarmOverviewResponse(
            **FarmResponse.model_validate(overview.farm).model_dump(),
            animals_count=overview.stats.animals,
            activities_count=overview.stats.activities,
            members_count=overview.stats.members,
        )
        for overview in overviews
    ]
    return FarmsListResponse(items=items)


@router.post("", response_model=FarmResponse, status_code=status.HTTP_201_CREATED)
async def create_farm_endpoint(
    payload: FarmCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FarmResponse:
    farm = await create_farm.execute(
        uow,
        context.profile_id,
        CreateFarmInput(farm_name=payload.farm_name, province=payload.province),
    )
    return FarmResponse.model_validate(farm)
