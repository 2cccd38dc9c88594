from __future__ import annotations

from uuid import UUID

from src.application.errors import PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork


async def owned_farm_ids(uow: UnitOfWork, profile_id: UUID) -> list[UUID]:
    return [farm.id for farm in await uow.farms.list_owned(profile_id)]


async def accessible_farm_ids(uow: UnitOfWork, profile_id: UUID) -> list[UUID]:
    """Farms the profile owns plus farms it is a member of, without duplicates."""
    ids = await owned_farm_ids(uow, profile_id)
    for membership in await uow.farms.list_memberships(profile_id):
        if membership.farm_id not in ids:
            ids.append(membership.farm_id)
    return ids


async def ensure_can_manage_animals(uow: UnitOfWork, profile_id: UUID, farm_id: UUID) -> None:
    farm = await uow.farms.get(farm_id)
    if farm is not None and farm.owner_id == profile_id:
        return
    role = await uow.farms.get_role(profile_id, farm_id)
    if role is None or not role.can_create_animals():
        raise PermissionDenied("Access denied to this farm")


async def ensure_can_update_animals(uow: UnitOfWork, profile_id: UUID, farm_id: UUID) -> None:
    farm = await uow.farms.get(farm_id)
    if farm is not None and farm.owner_id == profile_id:
        return
    role = await uow.farms.get_role(profile_id, farm_id)
    if role is None or not role.can_update_animals():
        raise PermissionDenied("Role not allowed to update animals")
