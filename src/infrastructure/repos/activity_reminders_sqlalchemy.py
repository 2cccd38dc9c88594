from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.activity_reminders import (
    ActivityReminderRepository,
    DueReminder,
)
from src.domain.models.activity_reminder import ActivityReminder
from src.domain.value_objects.activity_status import ActivityStatus
from src.infrastructure.db.orm.activity import ActivityORM
from src.infrastructure.db.orm.activity_reminder import ActivityReminderORM
from src.infrastructure.db.orm.animal import AnimalORM
from src.infrastructure.db.orm.farm import FarmORM
from src.infrastructure.repos.activities_sqlalchemy import (
    ActivitiesSQLAlchemyRepository,
    animal_summary_from_orm,
)


class ActivityRemindersSQLAlchemyRepository(ActivityReminderRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ActivityReminderORM) -> ActivityReminder:
        return ActivityReminder(
            id=orm.id,
            activity_id=orm.activity_id,
            farm_id=orm.farm_id,
            reminder_date=orm.reminder_date,
            reminder_time=orm.reminder_time,
            notification_sent=orm.notification_sent,
            sent_at=orm.sent_at,
            created_at=orm.created_at,
        )

    async def get_by_activity(self, activity_id: UUID) -> ActivityReminder | None:
        stmt = select(ActivityReminderORM).where(ActivityReminderORM.activity_id == activity_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def upsert(self, reminder: ActivityReminder) -> ActivityReminder:
        stmt = select(ActivityReminderORM).where(
            ActivityReminderORM.activity_id == reminder.activity_id
        )
        result = await self.session.execute(stmt)
        existing: ActivityReminderORM | None = result.scalar_one_or_none()
        if existing:
            existing.reminder_date = reminder.reminder_date
            existing.reminder_time = reminder.reminder_time
            existing.notification_sent = reminder.notification_sent
            existing.sent_at = reminder.sent_at
            await self.session.flush()
            return self._to_domain(existing)
        orm = ActivityReminderORM(
            id=reminder.id,
            activity_id=reminder.activity_id,
            farm_id=reminder.farm_id,
            reminder_date=reminder.reminder_date,
            reminder_time=reminder.reminder_time,
            notification_sent=reminder.notification_sent,
            sent_at=reminder.sent_at,
            created_at=reminder.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Reminder already exists for this activity") from exc
        return self._to_domain(orm)

    async def delete_for_activity(
        self, activity_id: UUID, *, on_or_after: date | None = None
    ) -> int:
        stmt = delete(ActivityReminderORM).where(ActivityReminderORM.activity_id == activity_id)
        if on_or_after is not None:
            stmt = stmt.where(ActivityReminderORM.reminder_date >= on_or_after)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def list_due(self, on_date: date, *, skip_sent: bool = True) -> list[DueReminder]:
        stmt = (
            select(ActivityReminderORM, ActivityORM, AnimalORM, FarmORM.owner_id)
            .join(ActivityORM, ActivityORM.id == ActivityReminderORM.activity_id)
            .join(AnimalORM, AnimalORM.id == ActivityORM.animal_id)
            .join(FarmORM, FarmORM.id == ActivityORM.farm_id)
            .where(
                ActivityReminderORM.reminder_date == on_date,
                ActivityORM.status == ActivityStatus.PENDING,
            )
            .order_by(ActivityReminderORM.reminder_time, ActivityORM.created_at, ActivityORM.id)
        )
        if skip_sent:
            stmt = stmt.where(ActivityReminderORM.notification_sent.is_(False))
        result = await self.session.execute(stmt)
        return [
            DueReminder(
                reminder=self._to_domain(reminder_orm),
                activity=ActivitiesSQLAlchemyRepository.to_domain(activity_orm),
                animal=animal_summary_from_orm(animal_orm),
                owner_id=owner_id,
            )
            for reminder_orm, activity_orm, animal_orm, owner_id in result.all()
        ]

    async def mark_sent(self, reminder_id: UUID, sent_at: datetime) -> None:
        await self.session.execute(
            update(ActivityReminderORM)
            .where(ActivityReminderORM.id == reminder_id)
            .values(notification_sent=True, sent_at=sent_at)
        )
