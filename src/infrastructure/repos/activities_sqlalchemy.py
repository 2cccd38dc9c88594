from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.activities import (
    ActivityFilters,
    ActivityRepository,
    ActivityWithAnimal,
    AnimalSummary,
)
from src.domain.models.activity import Activity
from src.domain.value_objects.activity_status import ActivityStatus
from src.infrastructure.db.orm.activity import ActivityORM
from src.infrastructure.db.orm.animal import AnimalORM

_SORT_COLUMNS = {
    "activity_date": ActivityORM.activity_date,
    "reminder_date": ActivityORM.reminder_date,
    "created_at": ActivityORM.created_at,
}


def animal_summary_from_orm(orm: AnimalORM) -> AnimalSummary:
    return AnimalSummary(
        id=orm.id, name=orm.name, animal_code=orm.animal_code, animal_type=orm.animal_type
    )


class ActivitiesSQLAlchemyRepository(ActivityRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def to_domain(orm: ActivityORM) -> Activity:
        return Activity(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            title=orm.title,
            activity_date=orm.activity_date,
            created_by=orm.created_by,
            description=orm.description,
            reminder_date=orm.reminder_date,
            status=orm.status,
            completed_by=orm.completed_by,
            completed_at=orm.completed_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _with_animal(self):
        return select(ActivityORM, AnimalORM).join(AnimalORM, AnimalORM.id == ActivityORM.animal_id)

    async def add(self, activity: Activity) -> Activity:
        orm = ActivityORM(
            id=activity.id,
            farm_id=activity.farm_id,
            animal_id=activity.animal_id,
            title=activity.title,
            description=activity.description,
            activity_date=activity.activity_date,
            reminder_date=activity.reminder_date,
            status=activity.status,
            created_by=activity.created_by,
            completed_by=activity.completed_by,
            completed_at=activity.completed_at,
            created_at=activity.created_at,
            updated_at=activity.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self.to_domain(orm)

    async def get(self, farm_ids: list[UUID], activity_id: UUID) -> Activity | None:
        if not farm_ids:
            return None
        stmt = select(ActivityORM).where(
            ActivityORM.id == activity_id, ActivityORM.farm_id.in_(farm_ids)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self.to_domain(orm) if orm else None

    async def get_with_animal(
        self, farm_ids: list[UUID], activity_id: UUID
    ) -> ActivityWithAnimal | None:
        if not farm_ids:
            return None
        stmt = self._with_animal().where(
            ActivityORM.id == activity_id, ActivityORM.farm_id.in_(farm_ids)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        activity_orm, animal_orm = row
        return ActivityWithAnimal(
            activity=self.to_domain(activity_orm), animal=animal_summary_from_orm(animal_orm)
        )

    async def save(self, activity: Activity) -> Activity:
        orm = await self.session.get(ActivityORM, activity.id)
        if orm is None:
            return await self.add(activity)
        orm.title = activity.title
        orm.description = activity.description
        orm.activity_date = activity.activity_date
        orm.reminder_date = activity.reminder_date
        orm.status = activity.status
        orm.completed_by = activity.completed_by
        orm.completed_at = activity.completed_at
        orm.updated_at = activity.updated_at
        await self.session.flush()
        return self.to_domain(orm)

    async def delete(self, activity_id: UUID) -> bool:
        result = await self.session.execute(
            delete(ActivityORM).where(ActivityORM.id == activity_id)
        )
        return (result.rowcount or 0) > 0

    def _filtered(self, stmt, farm_ids: list[UUID], filters: ActivityFilters):
        stmt = stmt.where(ActivityORM.farm_id.in_(farm_ids))
        if filters.animal_id is not None:
            stmt = stmt.where(ActivityORM.animal_id == filters.animal_id)
        if filters.status is not None:
            stmt = stmt.where(ActivityORM.status == filters.status)
        if filters.date_from is not None:
            stmt = stmt.where(ActivityORM.activity_date >= filters.date_from)
        if filters.date_to is not None:
            stmt = stmt.where(ActivityORM.activity_date <= filters.date_to)
        if filters.has_reminder is True:
            stmt = stmt.where(ActivityORM.reminder_date.is_not(None))
        elif filters.has_reminder is False:
            stmt = stmt.where(ActivityORM.reminder_date.is_(None))
        return stmt

    async def list(
        self,
        farm_ids: list[UUID],
        filters: ActivityFilters,
        *,
        sort_by: str = "created_at",
        sort_dir: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[ActivityWithAnimal], int]:
        if not farm_ids:
            return [], 0
        total = await self.session.scalar(
            self._filtered(select(func.count(ActivityORM.id)), farm_ids, filters)
        )
        column = _SORT_COLUMNS.get(sort_by, ActivityORM.created_at)
        order = column.asc() if sort_dir == "asc" else column.desc()
        stmt = (
            self._filtered(self._with_animal(), farm_ids, filters)
            .order_by(order.nulls_last(), ActivityORM.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        items = [
            ActivityWithAnimal(
                activity=self.to_domain(activity_orm), animal=animal_summary_from_orm(animal_orm)
            )
            for activity_orm, animal_orm in result.all()
        ]
        return items, total or 0

    async def list_pending_with_reminder_between(
        self, farm_ids: list[UUID], start: date, end: date
    ) -> list[ActivityWithAnimal]:
        if not farm_ids:
            return []
        stmt = (
            self._with_animal()
            .where(
                ActivityORM.farm_id.in_(farm_ids),
                ActivityORM.status == ActivityStatus.PENDING,
                ActivityORM.reminder_date >= start,
                ActivityORM.reminder_date <= end,
            )
            .order_by(ActivityORM.reminder_date.asc(), ActivityORM.activity_date.asc())
        )
        result = await self.session.execute(stmt)
        return [
            ActivityWithAnimal(
                activity=self.to_domain(activity_orm), animal=animal_summary_from_orm(animal_orm)
            )
            for activity_orm, animal_orm in result.all()
        ]
