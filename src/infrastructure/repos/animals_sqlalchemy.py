from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.animals import AnimalFilters, AnimalRepository
from src.domain.models.animal import Animal
from src.infrastructure.db.orm.animal import AnimalORM

_SORT_COLUMNS = {
    "name": AnimalORM.name,
    "animal_code": AnimalORM.animal_code,
    "created_at": AnimalORM.created_at,
    "updated_at": AnimalORM.updated_at,
}


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_code=orm.animal_code,
            animal_type=orm.animal_type,
            name=orm.name,
            sex=orm.sex,
            birth_date=orm.birth_date,
            color=orm.color,
            weight_kg=orm.weight_kg,
            height_cm=orm.height_cm,
            mother_name=orm.mother_name,
            father_name=orm.father_name,
            image_url=orm.image_url,
            status=orm.status,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            animal_code=animal.animal_code,
            animal_type=animal.animal_type,
            name=animal.name,
            sex=animal.sex,
            birth_date=animal.birth_date,
            color=animal.color,
            weight_kg=animal.weight_kg,
            height_cm=animal.height_cm,
            mother_name=animal.mother_name,
            father_name=animal.father_name,
            image_url=animal.image_url,
            status=animal.status,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Animal ID already exists in this farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_ids: list[UUID], animal_id: UUID) -> Animal | None:
        if not farm_ids:
            return None
        stmt = select(AnimalORM).where(
            AnimalORM.id == animal_id, AnimalORM.farm_id.in_(farm_ids)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def code_exists(
        self, farm_id: UUID, animal_code: str, *, exclude_animal_id: UUID | None = None
    ) -> bool:
        stmt = select(AnimalORM.id).where(
            AnimalORM.farm_id == farm_id, AnimalORM.animal_code == animal_code
        )
        if exclude_animal_id is not None:
            stmt = stmt.where(AnimalORM.id != exclude_animal_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_codes_with_prefix(self, farm_id: UUID, prefix: str) -> list[str]:
        stmt = select(AnimalORM.animal_code).where(
            AnimalORM.farm_id == farm_id, AnimalORM.animal_code.startswith(prefix)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    def _filtered(self, stmt, farm_ids: list[UUID], filters: AnimalFilters):
        stmt = stmt.where(AnimalORM.farm_id.in_(farm_ids))
        if filters.animal_type is not None:
            stmt = stmt.where(AnimalORM.animal_type == filters.animal_type)
        if filters.status is not None:
            stmt = stmt.where(AnimalORM.status == filters.status)
        if filters.search:
            pattern = f"%{filters.search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(AnimalORM.name).like(pattern),
                    func.lower(AnimalORM.animal_code).like(pattern),
                )
            )
        return stmt

    async def list(
        self,
        farm_ids: list[UUID],
        filters: AnimalFilters,
        *,
        sort_by: str = "created_at",
        sort_dir: str = "desc",
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Animal], int]:
        if not farm_ids:
            return [], 0
        total = await self.session.scalar(
            self._filtered(select(func.count(AnimalORM.id)), farm_ids, filters)
        )
        column = _SORT_COLUMNS.get(sort_by, AnimalORM.created_at)
        order = column.asc() if sort_dir == "asc" else column.desc()
        stmt = (
            self._filtered(select(AnimalORM), farm_ids, filters)
            .order_by(order, AnimalORM.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars()], total or 0

    async def update(self, animal_id: UUID, data: dict) -> Animal | None:
        orm = await self.session.get(AnimalORM, animal_id)
        if not orm:
            return None
        for key, value in data.items():
            setattr(orm, key, value)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to update animal due to constraint violation") from exc
        await self.session.refresh(orm)
        return self._to_domain(orm)
