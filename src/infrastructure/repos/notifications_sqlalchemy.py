from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.notifications import NotificationRepository
from src.domain.models.notification import Notification
from src.infrastructure.db.orm.notification import NotificationORM


class NotificationsSQLAlchemyRepository(NotificationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: NotificationORM) -> Notification:
        return Notification(
            id=orm.id,
            user_id=orm.user_id,
            farm_id=orm.farm_id,
            type=orm.type,
            title=orm.title,
            message=orm.message,
            activity_id=orm.activity_id,
            push_sent=orm.push_sent,
            push_sent_at=orm.push_sent_at,
            is_read=orm.is_read,
            created_at=orm.created_at,
        )

    def _to_orm(self, notification: Notification) -> NotificationORM:
        return NotificationORM(
            id=notification.id,
            user_id=notification.user_id,
            farm_id=notification.farm_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            activity_id=notification.activity_id,
            push_sent=notification.push_sent,
            push_sent_at=notification.push_sent_at,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )

    async def add(self, notification: Notification) -> Notification:
        orm = self._to_orm(notification)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list_by_user(
        self, user_id: UUID, *, limit: int = 50, offset: int = 0
    ) -> list[Notification]:
        stmt = (
            select(NotificationORM)
            .where(NotificationORM.user_id == user_id)
            .order_by(NotificationORM.created_at.desc(), NotificationORM.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count_by_user(self, user_id: UUID) -> int:
        stmt = select(func.count(NotificationORM.id)).where(NotificationORM.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0
