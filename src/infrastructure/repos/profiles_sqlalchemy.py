from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.profiles import ProfileRepository
from src.domain.models.profile import Profile
from src.infrastructure.db.orm.profile import ProfileORM


class ProfilesSQLAlchemyRepository(ProfileRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ProfileORM) -> Profile:
        return Profile(
            id=orm.id,
            external_user_id=orm.external_user_id,
            first_name=orm.first_name,
            last_name=orm.last_name,
            phone_number=orm.phone_number,
            avatar_url=orm.avatar_url,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, profile: Profile) -> Profile:
        orm = ProfileORM(
            id=profile.id,
            external_user_id=profile.external_user_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone_number=profile.phone_number,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Profile already exists for this user") from exc
        return self._to_domain(orm)

    async def get(self, profile_id: UUID) -> Profile | None:
        orm = await self.session.get(ProfileORM, profile_id)
        return self._to_domain(orm) if orm else None

    async def get_by_external_id(self, external_user_id: str) -> Profile | None:
        stmt = select(ProfileORM).where(ProfileORM.external_user_id == external_user_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
