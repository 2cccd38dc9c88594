from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.activities import ActivityRepository
from src.application.interfaces.repositories.activity_reminders import (
    ActivityReminderRepository,
)
from src.application.interfaces.repositories.animals import AnimalRepository
from src.application.interfaces.repositories.farms import FarmRepository
from src.application.interfaces.repositories.notifications import NotificationRepository
from src.application.interfaces.repositories.profiles import ProfileRepository
from src.application.interfaces.repositories.push_subscriptions import (
    PushSubscriptionRepository,
)


class UnitOfWork(Protocol):
    profiles: ProfileRepository
    farms: FarmRepository
    animals: AnimalRepository
    activities: ActivityRepository
    reminders: ActivityReminderRepository
    push_subscriptions: PushSubscriptionRepository
    notifications: NotificationRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
