from __future__ import annotations

import logging
from typing import Any, Mapping

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.farm import Farm
from src.domain.models.membership import Membership
from src.domain.models.profile import Profile
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


def _claim(claims: Mapping[str, Any], *names: str) -> str | None:
    for name in names:
        value = claims.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


async def execute(
    uow: UnitOfWork, external_user_id: str, claims: Mapping[str, Any] | None = None
) -> Profile:
    """Return the profile linked to the identity provider subject, provisioning it if needed.

    A new profile also gets a default farm with an OWNER membership.
    """
    if not external_user_id:
        raise AuthError("Token missing subject")
    existing = await uow.profiles.get_by_external_id(external_user_id)
    if existing:
        return existing

    claims = claims or {}
    profile = await uow.profiles.add(
        Profile.create(
            external_user_id=external_user_id,
            first_name=_claim(claims, "first_name", "given_name") or "User",
            last_name=_claim(claims, "last_name", "family_name") or "",
            phone_number=_claim(claims, "phone_number"),
            avatar_url=_claim(claims, "image_url", "picture"),
        )
    )
    farm = await uow.farms.add(Farm.create(owner_id=profile.id))
    await uow.farms.add_member(Membership(user_id=profile.id, farm_id=farm.id, role=Role.OWNER))
    await uow.commit()
    logger.info("Profile provisioned: profile=%s farm=%s", profile.id, farm.id)
    return profile
