from __future__ import annotations

from datetime import datetime, timezone


async def test_first_request_provisions_default_farm(client, headers):
    response = await client.get("/api/v1/farms", headers=headers("somchai"))

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["farm_code"].startswith("FM")
    assert items[0]["members_count"] == 1
    assert items[0]["animals_count"] == 0


async def test_create_farm_and_list_counts(client, headers):
    owner = headers("somchai")
    created = await client.post(
        "/api/v1/farms", json={"farm_name": "ฟาร์มทุ่งนา", "province": "Surin"}, headers=owner
    )
    assert created.status_code == 201
    farm = created.json()
    assert farm["farm_name"] == "ฟาร์มทุ่งนา"
    assert farm["farm_code"].startswith("FM")

    animal = await client.post(
        "/api/v1/animals",
        json={"farm_id": farm["id"], "animal_type": "BUFFALO", "name": "Thongdee"},
        headers=owner,
    )
    await client.post(
        "/api/v1/activities",
        json={
            "farm_id": farm["id"],
            "animal_id": animal.json()["id"],
            "title": "ถ่ายพยาธิ",
            "activity_date": datetime.now(timezone.utc).date().isoformat(),
        },
        headers=owner,
    )

    listed = await client.get("/api/v1/farms", headers=owner)
    by_id = {item["id"]: item for item in listed.json()["items"]}
    assert len(by_id) == 2
    assert by_id[farm["id"]]["animals_count"] == 1
    assert by_id[farm["id"]]["activities_count"] == 1
    assert by_id[farm["id"]]["members_count"] == 1

    other = await client.get("/api/v1/farms", headers=headers("malee"))
    assert farm["id"] not in {item["id"] for item in other.json()["items"]}


async def test_create_farm_rejects_blank_name(client, headers):
    response = await client.post(
        "/api/v1/farms", json={"farm_name": "", "province": "Surin"}, headers=headers("somchai")
    )
    assert response.status_code == 422
