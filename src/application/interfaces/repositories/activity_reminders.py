from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from src.application.interfaces.repositories.activities import AnimalSummary
from src.domain.models.activity import Activity
from src.domain.models.activity_reminder import ActivityReminder


@dataclass(slots=True)
class DueReminder:
    """A reminder due for dispatch, with everything needed to notify the farm owner."""

    reminder: ActivityReminder
    activity: Activity
    animal: AnimalSummary
    owner_id: UUID


class ActivityReminderRepository(Protocol):
    async def get_by_activity(self, activity_id: UUID) -> ActivityReminder | None: ...

    async def upsert(self, reminder: ActivityReminder) -> ActivityReminder: ...

    async def delete_for_activity(
        self, activity_id: UUID, *, on_or_after: date | None = None
    ) -> int: ...

    async def list_due(self, on_date: date, *, skip_sent: bool = True) -> list[DueReminder]: ...

    async def mark_sent(self, reminder_id: UUID, sent_at: datetime) -> None: ...
