from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.repositories.activities import (
    ActivityFilters,
    ActivityWithAnimal,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.farms.access import accessible_farm_ids

SORT_FIELDS = {"activity_date", "reminder_date", "created_at"}


@dataclass(slots=True)
class ListActivitiesResult:
    items: list[ActivityWithAnimal]
    page: int
    limit: int
    total: int


async def execute(
    uow: UnitOfWork,
    profile_id: UUID,
    filters: ActivityFilters,
    *,
    sort_by: str = "activity_date",
    sort_dir: str = "asc",
    page: int = 1,
    limit: int = 10,
) -> ListActivitiesResult:
    if limit <= 0 or limit > 100:
        raise ValidationError("limit must be between 1 and 100")
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if sort_by not in SORT_FIELDS:
        raise ValidationError(f"sort_by must be one of: {', '.join(sorted(SORT_FIELDS))}")
    if sort_dir not in {"asc", "desc"}:
        raise ValidationError("sort_dir must be asc or desc")
    if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
        raise ValidationError("date_from must be on or before date_to")

    farm_ids = await accessible_farm_ids(uow, profile_id)
    if filters.farm_id is not None:
        farm_ids = [fid for fid in farm_ids if fid == filters.farm_id]
    if not farm_ids:
        return ListActivitiesResult(items=[], page=page, limit=limit, total=0)

    items, total = await uow.activities.list(
        farm_ids,
        filters,
        sort_by=sort_by,
        sort_dir=sort_dir,
        limit=limit,
        offset=(page - 1) * limit,
    )
    return ListActivitiesResult(items=items, page=page, limit=limit, total=total)
