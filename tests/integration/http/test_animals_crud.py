from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select

from src.infrastructure.db.orm.animal import AnimalORM


async def _farm_id(client, headers) -> str:
    response = await client.get("/api/v1/farms", headers=headers)
    assert response.status_code == 200
    return response.json()["items"][0]["id"]


async def test_animals_crud_flow(app, client, headers):
    owner = headers("somchai")
    farm_id = await _farm_id(client, owner)
    prefix = "BF" + datetime.now(timezone.utc).strftime("%Y%m%d")

    preview = await client.post(
        "/api/v1/animals/generate-id", json={"animal_type": "BUFFALO"}, headers=owner
    )
    assert preview.status_code == 200
    assert preview.json()["animal_code"] == f"{prefix}001"

    create_response = await client.post(
        "/api/v1/animals",
        json={"farm_id": farm_id, "animal_type": "BUFFALO", "name": "Thongdee", "sex": "FEMALE"},
        headers=owner,
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["animal_code"] == f"{prefix}001"
    assert created["status"] == "ACTIVE"
    animal_id = created["id"]

    second = await client.post(
        "/api/v1/animals",
        json={"farm_id": farm_id, "animal_type": "BUFFALO", "name": "Daeng"},
        headers=owner,
    )
    assert second.json()["animal_code"] == f"{prefix}002"

    list_response = await client.get(
        "/api/v1/animals", params={"search": "thong"}, headers=owner
    )
    assert list_response.status_code == 200
    body = list_response.json()
    assert body["total"] == 1
    assert body["items"][0]["id"] == animal_id

    update_response = await client.patch(
        f"/api/v1/animals/{animal_id}", json={"weight_kg": 450}, headers=owner
    )
    assert update_response.status_code == 200
    assert update_response.json()["weight_kg"] == 450
    assert update_response.json()["name"] == "Thongdee"

    detail = await client.get(f"/api/v1/animals/{animal_id}", headers=owner)
    assert detail.status_code == 200
    assert detail.json()["activities_count"] == 0
    assert detail.json()["pending_activities"] == []

    async with app.state.session_factory() as session:
        stored = (
            await session.execute(select(AnimalORM).where(AnimalORM.farm_id == UUID(farm_id)))
        ).scalars().all()
    assert sorted(a.animal_code for a in stored) == [f"{prefix}001", f"{prefix}002"]


async def test_create_animal_with_explicit_code(client, headers):
    owner = headers("somchai")
    farm_id = await _farm_id(client, owner)
    payload = {
        "farm_id": farm_id,
        "animal_type": "COW",
        "name": "Khao",
        "animal_code": "CW20240101005",
    }

    created = await client.post("/api/v1/animals", json=payload, headers=owner)
    assert created.status_code == 201
    assert created.json()["animal_code"] == "CW20240101005"

    duplicate = await client.post(
        "/api/v1/animals", json={**payload, "name": "Other"}, headers=owner
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "conflict"

    check = await client.post(
        "/api/v1/animals/check-duplicate",
        json={"farm_id": farm_id, "animal_code": "CW20240101005"},
        headers=owner,
    )
    assert check.status_code == 200
    assert check.json() == {"is_duplicate": True}

    wrong_type = await client.post(
        "/api/v1/animals",
        json={**payload, "animal_code": "BF20240101006"},
        headers=owner,
    )
    assert wrong_type.status_code == 422
    assert wrong_type.json()["details"] == {"segment": "type_code"}


async def test_animals_are_isolated_between_farms(client, headers):
    owner = headers("somchai")
    stranger = headers("malee")
    farm_id = await _farm_id(client, owner)
    created = await client.post(
        "/api/v1/animals",
        json={"farm_id": farm_id, "animal_type": "PIG", "name": "Moo"},
        headers=owner,
    )
    animal_id = created.json()["id"]

    assert (await client.get(f"/api/v1/animals/{animal_id}", headers=stranger)).status_code == 404
    listed = await client.get("/api/v1/animals", params={"farm_id": farm_id}, headers=stranger)
    assert listed.json()["total"] == 0

    forbidden = await client.post(
        "/api/v1/animals",
        json={"farm_id": farm_id, "animal_type": "PIG", "name": "Intruder"},
        headers=stranger,
    )
    assert forbidden.status_code == 403

    check = await client.post(
        "/api/v1/animals/check-duplicate",
        json={"farm_id": farm_id, "animal_code": "PG20240101001"},
        headers=stranger,
    )
    assert check.status_code == 404


async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/v1/animals")
    assert response.status_code == 401
    assert response.json()["code"] == "auth_error"


async def test_health_and_vapid_key_are_public(client):
    assert (await client.get("/api/v1/health")).json() == {"status": "ok"}
    key = await client.get("/api/v1/notifications/vapid-public-key")
    assert key.status_code == 200
    assert key.json() == {"public_key": "BPublicTestKey"}
