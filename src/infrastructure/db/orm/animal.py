from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.value_objects.animal_status import AnimalStatus, Sex
from src.domain.value_objects.animal_type import AnimalType
from src.infrastructure.db.base import Base


class AnimalORM(Base):
    __tablename__ = "animals"
    __table_args__ = (
        UniqueConstraint("farm_id", "animal_code", name="ux_animals_farm_code"),
        Index("ix_animals_farm_status", "farm_id", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id", ondelete="CASCADE"), nullable=False
    )
    animal_code: Mapped[str] = mapped_column(String(13), nullable=False)
    animal_type: Mapped[AnimalType] = mapped_column(
        Enum(AnimalType, native_enum=False, length=20), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sex: Mapped[Sex | None] = mapped_column(
        Enum(Sex, native_enum=False, length=10), nullable=True
    )
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    weight_kg: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height_cm: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mother_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    father_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[AnimalStatus] = mapped_column(
        Enum(AnimalStatus, native_enum=False, length=20),
        nullable=False,
        default=AnimalStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
