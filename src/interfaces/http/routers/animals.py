from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.interfaces.repositories.animals import AnimalFilters
from src.application.use_cases.animals import (
    check_duplicate,
    create_animal,
    generate_code,
    get_animal,
    list_animals,
    update_animal,
)
from src.application.use_cases.animals.create_animal import CreateAnimalInput
from src.application.use_cases.animals.update_animal import UpdateAnimalInput
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_uow
from src.interfaces.http.schemas.activities import ActivityResponse
from src.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalDetailResponse,
    AnimalResponse,
    AnimalsListResponse,
    AnimalUpdate,
    CheckDuplicateRequest,
    CheckDuplicateResponse,
    GenerateCodeRequest,
    GenerateCodeResponse,
)

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get("", response_model=AnimalsListResponse)
async def list_animals_endpoint(
    farm_id: UUID | None = Query(None),
    animal_type: AnimalType | None = Query(None),
    status_filter: AnimalStatus | None = Query(AnimalStatus.ACTIVE, alias="status"),
    search: str | None = Query(None, max_length=100),
    sort_by: Literal["name", "animal_code", "created_at", "updated_at"] = Query("created_at"),
    sort_dir: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> AnimalsListResponse:
    result = await list_animals.execute(
        uow,
        context.profile_id,
        AnimalFilters(
            farm_id=farm_id, animal_type=animal_type, status=status_filter, search=search
        ),
        sort_by=sort_by,
        sort_dir=sort_dir,
        page=page,
        limit=limit,
    )
    return AnimalsListResponse(
        items=[AnimalResponse.model_validate(item) for item in result.items],
        page=result.page,
        limit=result.limit,
        total=result.total,
    )


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal_endpoint(
    payload: AnimalCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> AnimalResponse:
    animal = await create_animal.execute(
        uow, context.profile_id, CreateAnimalInput(**payload.model_dump())
    )
    return AnimalResponse.model_validate(animal)


@router.post("/generate-id", response_model=GenerateCodeResponse)
async def generate_code_endpoint(
    payload: GenerateCodeRequest,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> GenerateCodeResponse:
    code = await generate_code.execute(
        uow, context.profile_id, payload.animal_type, farm_id=payload.farm_id
    )
    return GenerateCodeResponse(animal_code=code)


@router.post("/check-duplicate", response_model=CheckDuplicateResponse)
async def check_duplicate_endpoint(
    payload: CheckDuplicateRequest,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CheckDuplicateResponse:
    taken = await check_duplicate.execute(
        uow,
        context.profile_id,
        payload.farm_id,
        payload.animal_code,
        exclude_animal_id=payload.exclude_animal_id,
    )
    return CheckDuplicateResponse(is_duplicate=taken)


@router.get("/{animal_id}", response_model=AnimalDetailResponse)
async def get_animal_endpoint(
    animal_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> AnimalDetailResponse:
    detail = await get_animal.execute(uow, context.profile_id, animal_id)
    return AnimalDetailResponse(
        **AnimalResponse.model_validate(detail.animal).model_dump(),
        pending_activities=[ActivityResponse.from_result(r) for r in detail.pending_activities],
        activities_count=detail.activities_count,
    )


@router.patch("/{animal_id}", response_model=AnimalResponse)
async def update_animal_endpoint(
    animal_id: UUID,
    payload: AnimalUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> AnimalResponse:
    animal = await update_animal.execute(
        uow,
        context.profile_id,
        animal_id,
        UpdateAnimalInput(**payload.model_dump(exclude_unset=True)),
    )
    return AnimalResponse.model_validate(animal)
