from __future__ import annotations

from datetime import date
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.interfaces.repositories.activities import ActivityFilters
from src.application.use_cases.activities import (
    change_status,
    create_activity,
    delete_activity,
    get_activity,
    list_activities,
    update_activity,
)
from src.application.use_cases.activities.create_activity import CreateActivityInput
from src.application.use_cases.activities.update_activity import UpdateActivityInput
from src.domain.value_objects.activity_status import ActivityStatus
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_uow
from src.interfaces.http.schemas.activities import (
    ActivitiesListResponse,
    ActivityCreate,
    ActivityResponse,
    ActivityStatusChange,
    ActivityUpdate,
)

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=ActivitiesListResponse)
async def list_activities_endpoint(
    farm_id: UUID | None = Query(None),
    animal_id: UUID | None = Query(None),
    status_filter: ActivityStatus | None = Query(None, alias="status"),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    has_reminder: bool | None = Query(None),
    sort_by: Literal["activity_date", "reminder_date", "created_at"] = Query("activity_date"),
    sort_dir: Literal["asc", "desc"] = Query("asc"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ActivitiesListResponse:
    result = await list_activities.execute(
        uow,
        context.profile_id,
        ActivityFilters(
            farm_id=farm_id,
            animal_id=animal_id,
            status=status_filter,
            date_from=date_from,
            date_to=date_to,
            has_reminder=has_reminder,
        ),
        sort_by=sort_by,
        sort_dir=sort_dir,
        page=page,
        limit=limit,
    )
    return ActivitiesListResponse(
        items=[ActivityResponse.from_result(item) for item in result.items],
        page=result.page,
        limit=result.limit,
        total=result.total,
    )


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity_endpoint(
    payload: ActivityCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ActivityResponse:
    result = await create_activity.execute(
        uow, context.profile_id, CreateActivityInput(**payload.model_dump())
    )
    return ActivityResponse.from_result(result)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity_endpoint(
    activity_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ActivityResponse:
    result = await get_activity.execute(uow, context.profile_id, activity_id)
    return ActivityResponse.from_result(result)


@router.put("/{activity_id}", response_model=ActivityResponse)
@router.patch("/{activity_id}", response_model=ActivityResponse)
async def update_activity_endpoint(
    activity_id: UUID,
    payload: ActivityUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ActivityResponse:
    # Only fields present in the body reach the use case
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    result = await update_activity.execute(
        uow, context.profile_id, activity_id, UpdateActivityInput(**changes)
    )
    return ActivityResponse.from_result(result)


@router.patch("/{activity_id}/status", response_model=ActivityResponse)
async def change_activity_status_endpoint(
    activity_id: UUID,
    payload: ActivityStatusChange,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ActivityResponse:
    result = await change_status.execute(
        uow,
        context.profile_id,
        activity_id,
        payload.status,
        reminder_date=payload.reminder_date,
    )
    return ActivityResponse.from_result(result)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity_endpoint(
    activity_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Response:
    await delete_activity.execute(uow, context.profile_id, activity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
