from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.farm import Farm
from src.domain.models.membership import Membership
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateFarmInput:
    farm_name: str
    province: str


def _validate(payload: CreateFarmInput) -> CreateFarmInput:
    farm_name = (payload.farm_name or "").strip()
    province = (payload.province or "").strip()
    if not farm_name or len(farm_name) > 100:
        raise ValidationError("Farm name must be between 1 and 100 characters")
    if not province or len(province) > 50:
        raise ValidationError("Province must be between 1 and 50 characters")
    return CreateFarmInput(farm_name=farm_name, province=province)


async def execute(uow: UnitOfWork, profile_id: UUID, payload: CreateFarmInput) -> Farm:
    payload = _validate(payload)
    farm = await uow.farms.add(
        Farm.create(owner_id=profile_id, farm_name=payload.farm_name, province=payload.province)
    )
    await uow.farms.add_member(Membership(user_id=profile_id, farm_id=farm.id, role=Role.OWNER))
    await uow.commit()
    logger.info("Farm created: id=%s owner=%s name=%s", farm.id, profile_id, farm.farm_name)
    return farm
