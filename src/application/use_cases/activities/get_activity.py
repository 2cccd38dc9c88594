from __future__ import annotations

from uuid import UUID

from src.application.interfaces.repositories.activities import ActivityWithAnimal
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.activities.common import load_activity


async def execute(uow: UnitOfWork, profile_id: UUID, activity_id: UUID) -> ActivityWithAnimal:
    return await load_activity(uow, profile_id, activity_id)
