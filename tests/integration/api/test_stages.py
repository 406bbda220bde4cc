import pytest
import pytest_asyncio
from httpx import AsyncClient

from tests.integration.helpers import register


@pytest_asyncio.fixture
async def dom(client: AsyncClient):
    return await register(client, "dom@example.com", "DOM")


@pytest.mark.asyncio
async def test_initialize_default_stages(client: AsyncClient, dom):
    created = await client.post("/stages/initialize", headers=dom["headers"])
    assert created.status_code == 201
    assert [s["name"] for s in created.json()["stages"]] == ["Grundstufe", "Anfängerstufe"]

    again = await client.post("/stages/initialize", headers=dom["headers"])
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "STAGES_ALREADY_EXIST"


@pytest.mark.asyncio
async def test_sub_cannot_manage_stages(client: AsyncClient):
    sub = await register(client, "pet@example.com", "SUB")

    response = await client.post(
        "/stages", json={"stage_number": 1, "name": "One"}, headers=sub["headers"]
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_stage_crud(client: AsyncClient, dom):
    created = await client.post(
        "/stages",
        json={"stage_number": 2, "name": "Two", "points_required": 200},
        headers=dom["headers"],
    )
    assert created.status_code == 201
    stage_id = created.json()["id"]

    duplicate = await client.post(
        "/stages", json={"stage_number": 2, "name": "Dup"}, headers=dom["headers"]
    )
    assert duplicate.status_code == 409

    updated = await client.put(
        f"/stages/{stage_id}", json={"name": "Second"}, headers=dom["headers"]
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Second"
    assert updated.json()["points_required"] == 200

    by_number = await client.get("/stages/number/2", headers=dom["headers"])
    assert by_number.json()["id"] == stage_id

    deleted = await client.delete(f"/stages/{stage_id}", headers=dom["headers"])
    assert deleted.status_code == 200

    missing = await client.get(f"/stages/{stage_id}", headers=dom["headers"])
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "STAGE_NOT_FOUND"


@pytest.mark.asyncio
async def test_only_one_stage_is_sub_active(client: AsyncClient, dom):
    await client.post("/stages/initialize", headers=dom["headers"])
    stages = (await client.get("/stages", headers=dom["headers"])).json()["stages"]
    first, second = stages[0]["id"], stages[1]["id"]

    await client.patch(f"/stages/{first}/toggle-active", headers=dom["headers"])
    await client.patch(f"/stages/{second}/toggle-active", headers=dom["headers"])

    stages = (await client.get("/stages", headers=dom["headers"])).json()["stages"]
    assert [s["is_sub_active"] for s in stages] == [False, True]

    current = await client.get("/stages/current", headers=dom["headers"])
    assert current.json()["stage"]["id"] == second

    off = await client.patch(f"/stages/{second}/toggle-active", headers=dom["headers"])
    assert off.json()["is_sub_active"] is False
    current = await client.get("/stages/current", headers=dom["headers"])
    assert current.json()["stage"] is None


@pytest.mark.asyncio
async def test_toggle_visible_and_locked(client: AsyncClient, dom):
    await client.post("/stages/initialize", headers=dom["headers"])
    stage_id = (await client.get("/stages/number/1", headers=dom["headers"])).json()["id"]

    visible = await client.patch(f"/stages/{stage_id}/toggle-visible", headers=dom["headers"])
    locked = await client.patch(f"/stages/{stage_id}/toggle-locked", headers=dom["headers"])

    assert visible.json()["is_sub_visible"] is False
    assert locked.json()["is_sub_locked"] is True


@pytest.mark.asyncio
async def test_entities_by_stage(client: AsyncClient, dom):
    for number in range(4):
        await client.post(
            "/stages",
            json={"stage_number": number, "name": f"S{number}", "points_required": number * 100},
            headers=dom["headers"],
        )

    bounded = await client.post(
        "/tasks",
        json={"title": "Bounded", "active_from_stage": 1, "active_to_stage": 3},
        headers=dom["headers"],
    )
    assert bounded.status_code == 201
    await client.post("/rules", json={"title": "Forever", "active_from_stage": 1}, headers=dom["headers"])
    await client.post("/goals", json={"title": "Later", "active_from_stage": 2}, headers=dom["headers"])

    bad = await client.post(
        "/tasks",
        json={"title": "Empty", "active_from_stage": 3, "active_to_stage": 3},
        headers=dom["headers"],
    )
    assert bad.status_code == 400
    assert bad.json()["error"]["code"] == "INVALID_STAGE_RANGE"

    stage_two = (await client.get("/stages/number/2/entities", headers=dom["headers"])).json()
    assert [t["title"] for t in stage_two["tasks"]["inherited"]] == ["Bounded"]
    assert [r["title"] for r in stage_two["rules"]["inherited"]] == ["Forever"]
    assert [g["title"] for g in stage_two["goals"]["direct"]] == ["Later"]

    stage_three = (await client.get("/stages/number/3/entities", headers=dom["headers"])).json()
    assert stage_three["tasks"] == {"direct": [], "inherited": []}
    assert [r["title"] for r in stage_three["rules"]["inherited"]] == ["Forever"]

    counts = {
        s["stage_number"]: (s["task_count"], s["rule_count"], s["goal_count"])
        for s in (await client.get("/stages", headers=dom["headers"])).json()["stages"]
    }
    assert counts[1] == (1, 1, 0)
    assert counts[2] == (0, 0, 1)


@pytest.mark.asyncio
@pytest.mark.parametrize("path, kind", [("/tasks", "task"), ("/rules", "rule"), ("/goals", "goal")])
async def test_create_each_entity_kind(client: AsyncClient, dom, path, kind):
    response = await client.post(
        path, json={"title": "X", "active_from_stage": 1}, headers=dom["headers"]
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["kind"] == kind
    assert body["created_by_id"] == dom["user"]["id"]
    assert body["created_at"]
