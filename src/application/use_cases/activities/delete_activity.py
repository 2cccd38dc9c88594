from __future__ import annotations

import logging
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.activities.common import load_activity

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, profile_id: UUID, activity_id: UUID) -> None:
    found = await load_activity(uow, profile_id, activity_id)
    await uow.reminders.delete_for_activity(found.activity.id)
    await uow.activities.delete(found.activity.id)
    await uow.commit()
    logger.info("Activity deleted: id=%s by=%s", found.activity.id, profile_id)
