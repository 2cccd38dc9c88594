from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.push_subscriptions import (
    PushSubscriptionRepository,
)
from src.domain.models.push_subscription import PushSubscription
from src.infrastructure.db.orm.push_subscription import PushSubscriptionORM


class PushSubscriptionsSQLAlchemyRepository(PushSubscriptionRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PushSubscriptionORM) -> PushSubscription:
        return PushSubscription(
            id=orm.id,
            user_id=orm.user_id,
            endpoint=orm.endpoint,
            p256dh_key=orm.p256dh_key,
            auth_key=orm.auth_key,
            is_active=orm.is_active,
            last_used_at=orm.last_used_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def upsert(
        self, *, user_id: UUID, endpoint: str, p256dh_key: str, auth_key: str
    ) -> PushSubscription:
        # Keyed by (user, endpoint); the unique constraint backs this up
        stmt = select(PushSubscriptionORM).where(
            PushSubscriptionORM.user_id == user_id, PushSubscriptionORM.endpoint == endpoint
        )
        result = await self.session.execute(stmt)
        existing: PushSubscriptionORM | None = result.scalar_one_or_none()
        now = datetime.now(timezone.utc)
        if existing:
            existing.p256dh_key = p256dh_key
            existing.auth_key = auth_key
            existing.is_active = True
            existing.last_used_at = now
            existing.updated_at = now
            await self.session.flush()
            return self._to_domain(existing)
        orm = PushSubscriptionORM(
            id=uuid4(),
            user_id=user_id,
            endpoint=endpoint,
            p256dh_key=p256dh_key,
            auth_key=auth_key,
            is_active=True,
            last_used_at=now,
            created_at=now,
            updated_at=now,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Push subscription already registered") from exc
        return self._to_domain(orm)

    async def list_active_for_user(self, user_id: UUID) -> list[PushSubscription]:
        stmt = (
            select(PushSubscriptionORM)
            .where(PushSubscriptionORM.user_id == user_id, PushSubscriptionORM.is_active.is_(True))
            .order_by(PushSubscriptionORM.created_at, PushSubscriptionORM.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars()]

    async def deactivate_for_user(self, user_id: UUID, *, endpoint: str | None = None) -> int:
        stmt = update(PushSubscriptionORM).where(
            PushSubscriptionORM.user_id == user_id, PushSubscriptionORM.is_active.is_(True)
        )
        if endpoint is not None:
            stmt = stmt.where(PushSubscriptionORM.endpoint == endpoint)
        result = await self.session.execute(
            stmt.values(is_active=False, updated_at=datetime.now(timezone.utc))
        )
        return result.rowcount or 0

    async def deactivate(self, subscription_ids: list[UUID]) -> int:
        """Mark subscriptions inactive so gone endpoints are not retried."""
        if not subscription_ids:
            return 0
        stmt = (
            update(PushSubscriptionORM)
            .where(PushSubscriptionORM.id.in_(subscription_ids))
            .values(is_active=False, updated_at=datetime.now(timezone.utc))
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def touch_last_used(self, subscription_ids: list[UUID], used_at: datetime) -> int:
        if not subscription_ids:
            return 0
        stmt = (
            update(PushSubscriptionORM)
            .where(PushSubscriptionORM.id.in_(subscription_ids))
            .values(last_used_at=used_at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
