from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._clear()

    def _clear(self) -> None:
        self.profiles = None
        self.farms = None
        self.animals = None
        self.activities = None
        self.reminders = None
        self.push_subscriptions = None
        self.notifications = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.activities_sqlalchemy import ActivitiesSQLAlchemyRepository
        from src.infrastructure.repos.activity_reminders_sqlalchemy import (
            ActivityRemindersSQLAlchemyRepository,
        )
        from src.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
        from src.infrastructure.repos.farms_sqlalchemy import FarmsSQLAlchemyRepository
        from src.infrastructure.repos.notifications_sqlalchemy import (
            NotificationsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.profiles_sqlalchemy import ProfilesSQLAlchemyRepository
        from src.infrastructure.repos.push_subscriptions_sqlalchemy import (
            PushSubscriptionsSQLAlchemyRepository,
        )

        self.profiles = ProfilesSQLAlchemyRepository(self.session)
        self.farms = FarmsSQLAlchemyRepository(self.session)
        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.activities = ActivitiesSQLAlchemyRepository(self.session)
        self.reminders = ActivityRemindersSQLAlchemyRepository(self.session)
        self.push_subscriptions = PushSubscriptionsSQLAlchemyRepository(self.session)
        self.notifications = NotificationsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._clear()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
