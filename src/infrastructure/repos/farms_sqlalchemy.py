from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.farms import FarmRepository, FarmStats
from src.domain.models.farm import Farm
from src.domain.models.membership import Membership
from src.domain.value_objects.role import Role
from src.infrastructure.db.orm.activity import ActivityORM
from src.infrastructure.db.orm.animal import AnimalORM
from src.infrastructure.db.orm.farm import FarmORM
from src.infrastructure.db.orm.membership import FarmMemberORM


class FarmsSQLAlchemyRepository(FarmRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmORM) -> Farm:
        return Farm(
            id=orm.id,
            owner_id=orm.owner_id,
            farm_name=orm.farm_name,
            province=orm.province,
            farm_code=orm.farm_code,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, farm: Farm) -> Farm:
        orm = FarmORM(
            id=farm.id,
            owner_id=farm.owner_id,
            farm_name=farm.farm_name,
            province=farm.province,
            farm_code=farm.farm_code,
            created_at=farm.created_at,
            updated_at=farm.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Farm code already exists") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID) -> Farm | None:
        orm = await self.session.get(FarmORM, farm_id)
        return self._to_domain(orm) if orm else None

    async def list_owned(self, owner_id: UUID) -> list[Farm]:
        stmt = (
            select(FarmORM)
            .where(FarmORM.owner_id == owner_id)
            .order_by(FarmORM.created_at.asc(), FarmORM.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars()]

    async def add_member(self, membership: Membership) -> None:
        existing = await self.session.get(
            FarmMemberORM, {"farm_id": membership.farm_id, "user_id": membership.user_id}
        )
        if existing:
            existing.role = membership.role
        else:
            self.session.add(
                FarmMemberORM(
                    farm_id=membership.farm_id,
                    user_id=membership.user_id,
                    role=membership.role,
                )
            )
        await self.session.flush()

    async def list_memberships(self, user_id: UUID) -> list[Membership]:
        stmt = select(FarmMemberORM).where(FarmMemberORM.user_id == user_id)
        result = await self.session.execute(stmt)
        return [
            Membership(user_id=row.user_id, farm_id=row.farm_id, role=row.role)
            for row in result.scalars()
        ]

    async def get_role(self, user_id: UUID, farm_id: UUID) -> Role | None:
        stmt = select(FarmMemberORM.role).where(
            FarmMemberORM.user_id == user_id, FarmMemberORM.farm_id == farm_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def stats(self, farm_id: UUID) -> FarmStats:
        animals = await self.session.scalar(
            select(func.count(AnimalORM.id)).where(AnimalORM.farm_id == farm_id)
        )
        activities = await self.session.scalar(
            select(func.count(ActivityORM.id)).where(ActivityORM.farm_id == farm_id)
        )
        members = await self.session.scalar(
            select(func.count()).select_from(FarmMemberORM).where(FarmMemberORM.farm_id == farm_id)
        )
        return FarmStats(animals=animals or 0, activities=activities or 0, members=members or 0)
