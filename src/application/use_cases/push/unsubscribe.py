from __future__ import annotations

import logging
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, profile_id: UUID, *, endpoint: str | None = None) -> int:
    """Deactivate one endpoint, or every endpoint of the user when none is given."""
    changed = await uow.push_subscriptions.deactivate_for_user(
        profile_id, endpoint=endpoint or None
    )
    await uow.commit()
    logger.info(
        "Push subscriptions deactivated: user=%s endpoint=%s count=%s",
        profile_id,
        endpoint or "*",
        changed,
    )
    return changed
