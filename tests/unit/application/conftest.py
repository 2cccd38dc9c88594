from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from src.application.errors import ConflictError
from src.application.interfaces.repositories.activities import ActivityWithAnimal, AnimalSummary
from src.application.interfaces.repositories.activity_reminders import DueReminder
from src.application.interfaces.repositories.farms import FarmStats
from src.domain.models.activity import Activity
from src.domain.models.activity_reminder import ActivityReminder
from src.domain.models.animal import Animal
from src.domain.models.farm import Farm
from src.domain.models.membership import Membership
from src.domain.models.notification import Notification
from src.domain.models.profile import Profile
from src.domain.models.push_subscription import PushSubscription
from src.domain.value_objects.activity_status import ActivityStatus
from src.domain.value_objects.animal_type import AnimalType
from src.domain.value_objects.role import Role


class ProfilesStub:
    def __init__(self) -> None:
        self.items: dict[UUID, Profile] = {}

    async def add(self, profile: Profile) -> Profile:
        self.items[profile.id] = replace(profile)
        return replace(profile)

    async def get(self, profile_id):
        found = self.items.get(profile_id)
        return replace(found) if found else None

    async def get_by_external_id(self, external_user_id):
        for profile in self.items.values():
            if profile.external_user_id == external_user_id:
                return replace(profile)
        return None


class FarmsStub:
    def __init__(self, store: SimpleNamespace) -> None:
        self.store = store
        self.items: dict[UUID, Farm] = {}
        self.members: list[Membership] = []

    async def add(self, farm: Farm) -> Farm:
        self.items[farm.id] = replace(farm)
        return replace(farm)

    async def get(self, farm_id):
        found = self.items.get(farm_id)
        return replace(found) if found else None

    async def list_owned(self, owner_id):
        return [replace(f) for f in self.items.values() if f.owner_id == owner_id]

    async def add_member(self, membership: Membership) -> None:
        self.members = [
            m
            for m in self.members
            if not (m.farm_id == membership.farm_id and m.user_id == membership.user_id)
        ]
        self.members.append(membership)

    async def list_memberships(self, user_id):
        return [m for m in self.members if m.user_id == user_id]

    async def get_role(self, user_id, farm_id):
        for m in self.members:
            if m.user_id == user_id and m.farm_id == farm_id:
                return m.role
        return None

    async def stats(self, farm_id) -> FarmStats:
        return FarmStats(
            animals=sum(1 for a in self.store.animals.items.values() if a.farm_id == farm_id),
            activities=sum(
                1 for a in self.store.activities.items.values() if a.farm_id == farm_id
            ),
            members=sum(1 for m in self.members if m.farm_id == farm_id),
        )


class AnimalsStub:
    def __init__(self) -> None:
        self.items: dict[UUID, Animal] = {}

    async def add(self, animal: Animal) -> Animal:
        if any(
            a.farm_id == animal.farm_id and a.animal_code == animal.animal_code
            for a in self.items.values()
        ):
            raise ConflictError("Animal ID already exists in this farm")
        self.items[animal.id] = replace(animal)
        return replace(animal)

    async def get(self, farm_ids, animal_id):
        found = self.items.get(animal_id)
        if found is None or found.farm_id not in farm_ids:
            return None
        return replace(found)

    async def code_exists(self, farm_id, animal_code, *, exclude_animal_id=None):
        return any(
            a.farm_id == farm_id and a.animal_code == animal_code and a.id != exclude_animal_id
            for a in self.items.values()
        )

    async def list_codes_with_prefix(self, farm_id, prefix):
        return [
            a.animal_code
            for a in self.items.values()
            if a.farm_id == farm_id and a.animal_code.startswith(prefix)
        ]

    async def list(
        self, farm_ids, filters, *, sort_by="created_at", sort_dir="desc", limit=20, offset=0
    ):
        rows = [
            a
            for a in self.items.values()
            if a.farm_id in farm_ids
            and (filters.animal_type is None or a.animal_type == filters.animal_type)
            and (filters.status is None or a.status == filters.status)
            and (
                not filters.search
                or filters.search.lower() in a.name.lower()
                or filters.search.lower() in a.animal_code.lower()
            )
        ]
        rows.sort(key=lambda a: getattr(a, sort_by), reverse=sort_dir == "desc")
        return [replace(a) for a in rows[offset : offset + limit]], len(rows)

    async def update(self, animal_id, data):
        found = self.items.get(animal_id)
        if found is None:
            return None
        updated = replace(found, **data)
        self.items[animal_id] = updated
        return replace(updated)

    def summary(self, animal_id) -> AnimalSummary:
        animal = self.items[animal_id]
        return AnimalSummary(
            id=animal.id,
            name=animal.name,
            animal_code=animal.animal_code,
            animal_type=animal.animal_type,
        )


class ActivitiesStub:
    def __init__(self, animals: AnimalsStub) -> None:
        self.animals = animals
        self.items: dict[UUID, Activity] = {}

    def _with_animal(self, activity: Activity) -> ActivityWithAnimal:
        return ActivityWithAnimal(
            activity=replace(activity), animal=self.animals.summary(activity.animal_id)
        )

    async def add(self, activity: Activity) -> Activity:
        self.items[activity.id] = replace(activity)
        return replace(activity)

    async def get(self, farm_ids, activity_id):
        found = self.items.get(activity_id)
        if found is None or found.farm_id not in farm_ids:
            return None
        return replace(found)

    async def get_with_animal(self, farm_ids, activity_id):
        found = self.items.get(activity_id)
        if found is None or found.farm_id not in farm_ids:
            return None
        return self._with_animal(found)

    async def save(self, activity: Activity) -> Activity:
        self.items[activity.id] = replace(activity)
        return replace(activity)

    async def delete(self, activity_id) -> bool:
        return self.items.pop(activity_id, None) is not None

    async def list(
        self, farm_ids, filters, *, sort_by="created_at", sort_dir="desc", limit=10, offset=0
    ):
        rows = [
            a
            for a in self.items.values()
            if a.farm_id in farm_ids
            and (filters.animal_id is None or a.animal_id == filters.animal_id)
            and (filters.status is None or a.status == filters.status)
            and (filters.date_from is None or a.activity_date >= filters.date_from)
            and (filters.date_to is None or a.activity_date <= filters.date_to)
            and (
                filters.has_reminder is None
                or (a.reminder_date is not None) == filters.has_reminder
            )
        ]
        rows.sort(key=lambda a: getattr(a, sort_by) or date.max, reverse=sort_dir == "desc")
        return [self._with_animal(a) for a in rows[offset : offset + limit]], len(rows)

    async def list_pending_with_reminder_between(self, farm_ids, start, end):
        rows = [
            a
            for a in self.items.values()
            if a.farm_id in farm_ids
            and a.status is ActivityStatus.PENDING
            and a.reminder_date is not None
            and start <= a.reminder_date <= end
        ]
        rows.sort(key=lambda a: a.reminder_date)
        return [self._with_animal(a) for a in rows]


class RemindersStub:
    def __init__(self, store: SimpleNamespace) -> None:
        self.store = store
        self.items: dict[UUID, ActivityReminder] = {}

    async def get_by_activity(self, activity_id):
        found = self.items.get(activity_id)
        return replace(found) if found else None

    async def upsert(self, reminder: ActivityReminder) -> ActivityReminder:
        existing = self.items.get(reminder.activity_id)
        stored = replace(reminder, id=existing.id) if existing else replace(reminder)
        self.items[reminder.activity_id] = stored
        return replace(stored)

    async def delete_for_activity(self, activity_id, *, on_or_after=None) -> int:
        found = self.items.get(activity_id)
        if found is None:
            return 0
        if on_or_after is not None and found.reminder_date < on_or_after:
            return 0
        del self.items[activity_id]
        return 1

    async def list_due(self, on_date, *, skip_sent=True):
        due = []
        for reminder in self.items.values():
            activity = self.store.activities.items.get(reminder.activity_id)
            if activity is None or activity.status is not ActivityStatus.PENDING:
                continue
            if reminder.reminder_date != on_date:
                continue
            if skip_sent and reminder.notification_sent:
                continue
            farm = self.store.farms.items[activity.farm_id]
            due.append(
                DueReminder(
                    reminder=replace(reminder),
                    activity=replace(activity),
                    animal=self.store.animals.summary(activity.animal_id),
                    owner_id=farm.owner_id,
                )
            )
        return due

    async def mark_sent(self, reminder_id, sent_at) -> None:
        for reminder in self.items.values():
            if reminder.id == reminder_id:
                reminder.mark_sent(sent_at)


class PushSubscriptionsStub:
    def __init__(self) -> None:
        self.items: list[PushSubscription] = []

    async def upsert(self, *, user_id, endpoint, p256dh_key, auth_key):
        now = datetime.now(timezone.utc)
        for sub in self.items:
            if sub.user_id == user_id and sub.endpoint == endpoint:
                sub.p256dh_key = p256dh_key
                sub.auth_key = auth_key
                sub.is_active = True
                sub.last_used_at = now
                return replace(sub)
        sub = PushSubscription.create(user_id, endpoint, p256dh_key, auth_key)
        self.items.append(sub)
        return replace(sub)

    async def list_active_for_user(self, user_id):
        return [replace(s) for s in self.items if s.user_id == user_id and s.is_active]

    async def deactivate_for_user(self, user_id, *, endpoint=None) -> int:
        changed = 0
        for sub in self.items:
            if sub.user_id != user_id or not sub.is_active:
                continue
            if endpoint is not None and sub.endpoint != endpoint:
                continue
            sub.is_active = False
            changed += 1
        return changed

    async def deactivate(self, subscription_ids) -> int:
        changed = 0
        for sub in self.items:
            if sub.id in subscription_ids:
                sub.is_active = False
                changed += 1
        return changed

    async def touch_last_used(self, subscription_ids, used_at) -> int:
        changed = 0
        for sub in self.items:
            if sub.id in subscription_ids:
                sub.last_used_at = used_at
                changed += 1
        return changed

    def by_endpoint(self, endpoint: str) -> PushSubscription:
        return next(s for s in self.items if s.endpoint == endpoint)


class NotificationsStub:
    def __init__(self) -> None:
        self.items: list[Notification] = []

    async def add(self, notification: Notification) -> Notification:
        self.items.append(replace(notification))
        return replace(notification)

    async def list_by_user(self, user_id, *, limit=50, offset=0):
        rows = sorted(
            (n for n in self.items if n.user_id == user_id),
            key=lambda n: n.created_at,
            reverse=True,
        )
        return rows[offset : offset + limit]

    async def count_by_user(self, user_id) -> int:
        return sum(1 for n in self.items if n.user_id == user_id)


def make_uow() -> SimpleNamespace:
    uow = SimpleNamespace(commits=0, rollbacks=0)
    uow.profiles = ProfilesStub()
    uow.animals = AnimalsStub()
    uow.activities = ActivitiesStub(uow.animals)
    uow.farms = FarmsStub(uow)
    uow.reminders = RemindersStub(uow)
    uow.push_subscriptions = PushSubscriptionsStub()
    uow.notifications = NotificationsStub()

    async def commit():
        uow.commits += 1

    async def rollback():
        uow.rollbacks += 1

    uow.commit = commit
    uow.rollback = rollback
    return uow


@pytest.fixture()
def uow() -> SimpleNamespace:
    return make_uow()


@pytest.fixture()
def seed(uow):
    """Factory that creates an owner, a farm and optionally an animal and an activity."""

    def _farm(role_member: UUID | None = None, role: Role = Role.MEMBER) -> Farm:
        owner = Profile.create(external_user_id=f"user-{uuid4()}", first_name="Somchai")
        uow.profiles.items[owner.id] = owner
        farm = Farm.create(owner_id=owner.id)
        uow.farms.items[farm.id] = farm
        uow.farms.members.append(Membership(user_id=owner.id, farm_id=farm.id, role=Role.OWNER))
        if role_member is not None:
            uow.farms.members.append(Membership(user_id=role_member, farm_id=farm.id, role=role))
        return farm

    def _animal(farm: Farm, name: str = "Thongdee", code: str = "BF20250101001") -> Animal:
        animal = Animal.create(
            farm_id=farm.id,
            animal_code=code,
            animal_type=AnimalType.BUFFALO,
            name=name,
        )
        uow.animals.items[animal.id] = animal
        return animal

    def _activity(
        farm: Farm,
        animal: Animal,
        *,
        title: str = "ฉีดวัคซีน",
        activity_date: date,
        reminder_date: date | None = None,
        status: ActivityStatus = ActivityStatus.PENDING,
    ) -> Activity:
        activity = Activity.create(
            farm_id=farm.id,
            animal_id=animal.id,
            title=title,
            activity_date=activity_date,
            created_by=farm.owner_id,
            reminder_date=reminder_date,
            status=status,
        )
        uow.activities.items[activity.id] = activity
        if reminder_date is not None:
            uow.reminders.items[activity.id] = ActivityReminder.create(
                activity.id, farm.id, reminder_date
            )
        return activity

    def _subscription(user_id: UUID, endpoint: str) -> PushSubscription:
        sub = PushSubscription.create(user_id, endpoint, "p256dh-key", "auth-key")
        uow.push_subscriptions.items.append(sub)
        return sub

    return SimpleNamespace(
        farm=_farm, animal=_animal, activity=_activity, subscription=_subscription
    )
