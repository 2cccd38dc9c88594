from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.application.errors import InfrastructureError
from src.application.notifications.delivery import DeliveryOptions
from src.application.use_cases.reminders import dispatch_due_reminders
from src.domain.value_objects.activity_status import ActivityStatus
from src.domain.value_objects.notification_type import NotificationType

NOW = datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)
TODAY = date(2025, 1, 10)

OK_ENDPOINT = "https://push.example.com/ok"
FLAKY_ENDPOINT = "https://push.example.com/flaky"
GONE_ENDPOINT = "https://push.example.com/gone"


@pytest.fixture()
def three_due(uow, seed):
    """Three farms with a reminder due today.

    Owner A has a working and a flaky device, owner B only a gone device,
    owner C has no device at all.
    """
    rows = []
    for name in ("A", "B", "C"):
        farm = seed.farm()
        animal = seed.animal(farm, name=f"Animal {name}")
        activity = seed.activity(
            farm, animal, title=f"Task {name}", activity_date=TODAY, reminder_date=TODAY
        )
        rows.append((farm, activity))
    seed.subscription(rows[0][0].owner_id, OK_ENDPOINT)
    seed.subscription(rows[0][0].owner_id, FLAKY_ENDPOINT)
    seed.subscription(rows[1][0].owner_id, GONE_ENDPOINT)
    return rows


@pytest.fixture()
def sender(push_sender_factory):
    return push_sender_factory(failures={FLAKY_ENDPOINT: 500, GONE_ENDPOINT: 410})


@pytest.mark.asyncio
async def test_run_counts_per_activity_outcomes(uow, three_due, sender):
    summary = await dispatch_due_reminders.execute(uow, sender, now=NOW)

    assert summary.success is True
    assert summary.total_activities == 3
    assert summary.notifications_sent == 1
    assert summary.notifications_failed == 2
    assert summary.partial is False
    assert [endpoint for endpoint, _ in sender.sent] == [OK_ENDPOINT]
    assert {e["statusCode"] for e in summary.errors} == {500, 410}


@pytest.mark.asyncio
async def test_run_writes_one_audit_row_per_activity(uow, three_due, sender):
    await dispatch_due_reminders.execute(uow, sender, now=NOW)

    rows = {n.activity_id: n for n in uow.notifications.items}
    assert len(uow.notifications.items) == 3
    (farm_a, act_a), (farm_b, act_b), (farm_c, act_c) = three_due
    assert rows[act_a.id].push_sent is True
    assert rows[act_a.id].user_id == farm_a.owner_id
    assert rows[act_b.id].push_sent is False
    assert rows[act_c.id].push_sent is False
    assert all(n.type is NotificationType.REMINDER for n in rows.values())
    assert rows[act_a.id].message == "Animal A: Task A"


@pytest.mark.asyncio
async def test_gone_subscription_is_deactivated(uow, three_due, sender):
    await dispatch_due_reminders.execute(uow, sender, now=NOW)

    assert uow.push_subscriptions.by_endpoint(GONE_ENDPOINT).is_active is False
    assert uow.push_subscriptions.by_endpoint(FLAKY_ENDPOINT).is_active is True
    assert uow.push_subscriptions.by_endpoint(OK_ENDPOINT).last_used_at == NOW


@pytest.mark.asyncio
async def test_owner_with_two_devices_is_reached_on_both(uow, seed, push_sender_factory):
    farm = seed.farm()
    animal = seed.animal(farm)
    seed.activity(farm, animal, title="Deworm", activity_date=TODAY, reminder_date=TODAY)
    phone = seed.subscription(farm.owner_id, "https://push.example.com/phone")
    tablet = seed.subscription(farm.owner_id, "https://push.example.com/tablet")
    sender = push_sender_factory()

    summary = await dispatch_due_reminders.execute(uow, sender, now=NOW)

    assert summary.notifications_sent == 1
    assert summary.notifications_failed == 0
    assert summary.errors == []
    assert sorted(endpoint for endpoint, _ in sender.sent) == sorted(
        [phone.endpoint, tablet.endpoint]
    )
    for endpoint in (phone.endpoint, tablet.endpoint):
        assert uow.push_subscriptions.by_endpoint(endpoint).last_used_at == NOW
    (audit,) = uow.notifications.items
    assert audit.push_sent is True
    assert audit.push_sent_at == NOW


@pytest.mark.asyncio
async def test_reminder_payload_links_to_activity(uow, three_due, sender):
    await dispatch_due_reminders.execute(
        uow, sender, options=DeliveryOptions(icon="/icon.png"), now=NOW
    )

    _, payload = sender.sent[0]
    activity_id = three_due[0][1].id
    assert payload["data"]["url"] == f"/dashboard/activities/{activity_id}?returnTo=notification"
    assert payload["icon"] == "/icon.png"
    assert payload["tag"] == f"reminder-{activity_id}"


@pytest.mark.asyncio
async def test_second_run_same_day_sends_nothing(uow, three_due, sender):
    await dispatch_due_reminders.execute(uow, sender, now=NOW)
    second = await dispatch_due_reminders.execute(uow, sender, now=NOW)

    assert second.total_activities == 0
    assert len(sender.sent) == 1
    assert len(uow.notifications.items) == 3


@pytest.mark.asyncio
async def test_without_sent_guard_reruns_resend(uow, three_due, sender):
    await dispatch_due_reminders.execute(uow, sender, skip_already_sent=False, now=NOW)
    second = await dispatch_due_reminders.execute(uow, sender, skip_already_sent=False, now=NOW)

    assert second.total_activities == 3
    assert len(sender.sent) == 2
    assert len(uow.notifications.items) == 6
    assert all(not r.notification_sent for r in uow.reminders.items.values())


@pytest.mark.asyncio
async def test_only_pending_activities_due_today_are_scanned(uow, seed, sender):
    farm = seed.farm()
    animal = seed.animal(farm)
    seed.activity(farm, animal, activity_date=TODAY, reminder_date=TODAY)
    seed.activity(farm, animal, activity_date=date(2025, 1, 12), reminder_date=date(2025, 1, 11))
    closed = seed.activity(farm, animal, activity_date=TODAY, reminder_date=TODAY)
    uow.activities.items[closed.id].status = ActivityStatus.COMPLETED

    summary = await dispatch_due_reminders.execute(uow, sender, now=NOW)

    assert summary.total_activities == 1


@pytest.mark.asyncio
async def test_missing_sender_counts_as_failed(uow, three_due):
    summary = await dispatch_due_reminders.execute(uow, None, now=NOW)

    assert summary.notifications_sent == 0
    assert summary.notifications_failed == 3
    assert len(uow.notifications.items) == 3


@pytest.mark.asyncio
async def test_deadline_leaves_rest_for_next_run(uow, three_due, sender):
    ticks = iter([0.0, 0.0, 5.0])

    summary = await dispatch_due_reminders.execute(
        uow, sender, deadline_seconds=1.0, now=NOW, clock=lambda: next(ticks)
    )

    assert summary.partial is True
    assert summary.skipped == 2
    assert len(uow.notifications.items) == 1


@pytest.mark.asyncio
async def test_activity_failure_does_not_abort_run(uow, three_due, sender):
    original_add = uow.notifications.add
    calls = {"n": 0}

    async def flaky_add(notification):
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("db hiccup")
        return await original_add(notification)

    uow.notifications.add = flaky_add

    summary = await dispatch_due_reminders.execute(uow, sender, now=NOW)

    assert summary.total_activities == 3
    assert summary.notifications_failed == 3
    assert uow.rollbacks == 1
    assert any(e["error"] == "db hiccup" for e in summary.errors)
    assert len(uow.notifications.items) == 2


@pytest.mark.asyncio
async def test_failure_to_load_due_reminders_raises(uow, sender):
    async def broken(*args, **kwargs):
        raise RuntimeError("connection refused")

    uow.reminders.list_due = broken

    with pytest.raises(InfrastructureError):
        await dispatch_due_reminders.execute(uow, sender, now=NOW)


@pytest.mark.asyncio
async def test_summary_serializes_camel_case(uow, three_due, sender):
    summary = await dispatch_due_reminders.execute(uow, sender, now=NOW)

    data = summary.to_dict()
    assert data["totalActivities"] == 3
    assert data["notificationsSent"] == 1
    assert data["timestamp"] == NOW.isoformat()
