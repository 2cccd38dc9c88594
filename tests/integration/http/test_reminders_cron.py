from __future__ import annotations

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from src.interfaces.http.main import create_app

ENDPOINT = "https://fcm.googleapis.com/fcm/send/device-1"


@pytest.fixture()
def cron_headers(test_settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {test_settings.cron_secret.get_secret_value()}"}


async def _activity_due_today(client, owner) -> str:
    farms = await client.get("/api/v1/farms", headers=owner)
    farm_id = farms.json()["items"][0]["id"]
    animal = await client.post(
        "/api/v1/animals",
        json={"farm_id": farm_id, "animal_type": "COW", "name": "Khao"},
        headers=owner,
    )
    today = datetime.now(timezone.utc).date().isoformat()
    created = await client.post(
        "/api/v1/activities",
        json={
            "farm_id": farm_id,
            "animal_id": animal.json()["id"],
            "title": "ให้อาหารเสริม",
            "activity_date": today,
            "reminder_date": today,
        },
        headers=owner,
    )
    assert created.status_code == 201
    return created.json()["id"]


async def test_cron_requires_secret(client):
    assert (await client.get("/api/v1/cron/reminders")).status_code == 401
    wrong = await client.get(
        "/api/v1/cron/reminders", headers={"Authorization": "Bearer nope"}
    )
    assert wrong.status_code == 401
    assert (await client.post("/api/v1/cron/reminders")).status_code == 401


async def test_cron_run_sends_reminder_once(client, headers, push_sender, cron_headers):
    owner = headers("somchai")
    activity_id = await _activity_due_today(client, owner)
    subscribed = await client.post(
        "/api/v1/notifications/subscriptions",
        json={"endpoint": ENDPOINT, "keys": {"p256dh": "BNcRd", "auth": "tBHI"}},
        headers=owner,
    )
    assert subscribed.status_code == 201
    # welcome push
    assert len(push_sender.sent) == 1

    run = await client.get("/api/v1/cron/reminders", headers=cron_headers)
    assert run.status_code == 200
    summary = run.json()
    assert summary["success"] is True
    assert summary["totalActivities"] == 1
    assert summary["notificationsSent"] == 1
    assert summary["notificationsFailed"] == 0

    endpoint, payload = push_sender.sent[-1]
    assert endpoint == ENDPOINT
    assert payload["data"]["activityId"] == activity_id

    again = await client.post("/api/v1/cron/reminders", headers=cron_headers)
    assert again.status_code == 200
    assert again.json()["totalActivities"] == 0
    assert len(push_sender.sent) == 2

    history = await client.get("/api/v1/notifications/history", headers=owner)
    assert history.status_code == 200
    body = history.json()
    assert body["total"] == 1
    assert body["items"][0]["activity_id"] == activity_id
    assert body["items"][0]["push_sent"] is True


async def test_cron_run_records_owner_without_devices(client, headers, cron_headers):
    owner = headers("malee")
    await _activity_due_today(client, owner)

    run = await client.get("/api/v1/cron/reminders", headers=cron_headers)

    assert run.json()["notificationsSent"] == 0
    assert run.json()["notificationsFailed"] == 1
    history = await client.get("/api/v1/notifications/history", headers=owner)
    assert history.json()["items"][0]["push_sent"] is False


async def test_manual_trigger_is_disabled_in_production(
    test_settings, jwks_client, push_sender, cron_headers
):
    settings = test_settings.model_copy(update={"environment": "production"})
    app = create_app(settings=settings, jwks_client=jwks_client, push_sender=push_sender)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post("/api/v1/cron/reminders", headers=cron_headers)
    await app.state.engine.dispose()
    assert response.status_code == 403


async def test_push_subscription_endpoints(client, headers, push_sender):
    owner = headers("somchai")
    payload = {"endpoint": ENDPOINT, "keys": {"p256dh": "BNcRd", "auth": "tBHI"}}
    assert (
        await client.post("/api/v1/notifications/subscriptions", json=payload, headers=owner)
    ).status_code == 201

    sent = await client.post("/api/v1/notifications/test", json={}, headers=owner)
    assert sent.status_code == 200
    assert sent.json()["sent"] == 1

    removed = await client.delete("/api/v1/notifications/subscriptions", headers=owner)
    assert removed.json() == {"deactivated": 1}

    none_left = await client.post("/api/v1/notifications/test", json={}, headers=owner)
    assert none_left.status_code == 404

    bad = await client.post(
        "/api/v1/notifications/subscriptions",
        json={"endpoint": "not a url", "keys": {"p256dh": "k", "auth": "a"}},
        headers=owner,
    )
    assert bad.status_code == 422
