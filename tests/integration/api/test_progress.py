import pytest
from httpx import AsyncClient

from tests.integration.helpers import connect, register


@pytest.mark.asyncio
async def test_award_points_moves_sub_through_stages(client: AsyncClient):
    dom = await register(client, "dom@example.com", "DOM")
    sub = await register(client, "pet@example.com", "SUB")
    for number, points in ((0, 0), (1, 100), (2, 250)):
        await client.post(
            "/stages",
            json={"stage_number": number, "name": f"S{number}", "points_required": points},
            headers=dom["headers"],
        )
    await connect(client, dom, sub)

    start = (await client.get("/progress/me", headers=sub["headers"])).json()
    assert start["total_points"] == 0
    assert start["current_stage"] == 0
    assert start["next_stage"] == 1

    awarded = await client.post(
        "/progress/award", json={"points": 175, "reason": "Good week"}, headers=dom["headers"]
    )
    assert awarded.status_code == 200
    progress = awarded.json()["progress"]
    assert progress["total_points"] == 175
    assert progress["current_stage"] == 1
    assert progress["progress_percentage"] == 50.0

    deducted = await client.post(
        "/progress/award", json={"points": -500}, headers=dom["headers"]
    )
    assert deducted.json()["progress"]["total_points"] == 0

    mine = (await client.get("/progress/me", headers=sub["headers"])).json()
    assert mine["total_points"] == 0


@pytest.mark.asyncio
async def test_award_requires_connection(client: AsyncClient):
    dom = await register(client, "dom@example.com", "DOM")

    response = await client.post("/progress/award", json={"points": 10}, headers=dom["headers"])

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NO_ACTIVE_CONNECTION"


@pytest.mark.asyncio
async def test_sub_cannot_award(client: AsyncClient):
    sub = await register(client, "pet@example.com", "SUB")

    response = await client.post("/progress/award", json={"points": 10}, headers=sub["headers"])

    assert response.status_code == 403
