from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.interfaces.repositories.farms import FarmStats
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.farm import Farm


@dataclass(slots=True)
class FarmOverview:
    farm: Farm
    stats: FarmStats


async def execute(uow: UnitOfWork, profile_id: UUID) -> list[FarmOverview]:
    farms = await uow.farms.list_owned(profile_id)
    return [FarmOverview(farm=farm, stats=await uow.farms.stats(farm.id)) for farm in farms]
