from __future__ import annotations

from datetime import date, datetime, time
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Time, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.models.activity_reminder import DEFAULT_REMINDER_TIME
from src.infrastructure.db.base import Base


class ActivityReminderORM(Base):
    __tablename__ = "activity_reminders"
    __table_args__ = (
        Index("ix_activity_reminders_date_sent", "reminder_date", "notification_sent"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    activity_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id", ondelete="CASCADE"), nullable=False
    )
    reminder_date: Mapped[date] = mapped_column(Date, nullable=False)
    reminder_time: Mapped[time] = mapped_column(
        Time, nullable=False, default=DEFAULT_REMINDER_TIME
    )
    notification_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
