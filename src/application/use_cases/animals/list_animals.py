from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.repositories.animals import AnimalFilters
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import accessible_farm_ids
from src.domain.models.animal import Animal

SORT_FIELDS = {"name", "animal_code", "created_at", "updated_at"}


@dataclass(slots=True)
class ListAnimalsResult:
    items: list[Animal]
    page: int
    limit: int
    total: int


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    filters: AnimalFilters,
    *,
    sort_by: str = "created_at",
    sort_dir: str = "desc",
    page: int = 1,
    limit: int = 20,
) -> ListAnimalsResult:
    if limit <= 0 or limit > 100:
        raise ValidationError("limit must be between 1 and 100")
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if sort_by not in SORT_FIELDS:
        raise ValidationError(f"sort_by must be one of: {', '.join(sorted(SORT_FIELDS))}")
    if sort_dir not in {"asc", "desc"}:
        raise ValidationError("sort_dir must be asc or desc")

    farm_ids = await accessible_farm_ids(uow, profile_id)
    if filters.farm_id is not None:
        farm_ids = [fid for fid in farm_ids if fid == filters.farm_id]
    if not farm_ids:
        return ListAnimalsResult(items=[], page=page, limit=limit, total=0)

    items, total = await uow.animals.list(
        farm_ids,
        filters,
        sort_by=sort_by,
        sort_dir=sort_dir,
        limit=limit,
        offset=(page - 1) * limit,
    )
    return ListAnimalsResult(items=items, page=page, limit=limit, total=total)
