import pytest
from httpx import AsyncClient

from tests.integration.helpers import connect, create_admin, register


@pytest.mark.asyncio
async def test_my_connection_and_availability(client: AsyncClient):
    dom = await register(client, "dom@example.com", "DOM")
    sub = await register(client, "pet@example.com", "SUB")

    before = await client.get("/connections/availability", headers=sub["headers"])
    assert before.json()["can_create_connection"] is True

    await connect(client, dom, sub)

    mine = await client.get("/connections/my-connection", headers=dom["headers"])
    assert mine.status_code == 200
    assert mine.json()["has_connection"] is True
    assert mine.json()["connection"]["partner"]["role"] == "SUB"

    after = await client.get("/connections/availability", headers=sub["headers"])
    assert after.json()["can_create_connection"] is False
    assert after.json()["has_active_connection"] is True


@pytest.mark.asyncio
async def test_terminate_then_reconnect_with_new_invitation(client: AsyncClient):
    dom = await register(client, "dom@example.com", "DOM")
    sub = await register(client, "pet@example.com", "SUB")
    await connect(client, dom, sub)

    terminated = await client.post("/connections/terminate", headers=sub["headers"])
    assert terminated.status_code == 200
    assert terminated.json()["success"] is True
    assert terminated.json()["connection"]["status"] == "TERMINATED"

    again = await client.post("/connections/terminate", headers=sub["headers"])
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "NO_ACTIVE_CONNECTION"

    mine = await client.get("/connections/my-connection", headers=dom["headers"])
    assert mine.json()["has_connection"] is False

    # Both parties are free again
    reconnected = await connect(client, dom, sub)
    assert reconnected["connection"]["status"] == "ACTIVE"


@pytest.mark.asyncio
async def test_admin_list_and_terminate(client: AsyncClient, db_session):
    dom = await register(client, "dom@example.com", "DOM")
    sub = await register(client, "pet@example.com", "SUB")
    admin = await create_admin(db_session)
    connection_id = (await connect(client, dom, sub))["connection"]["id"]

    forbidden = await client.get("/connections/admin/all", headers=dom["headers"])
    assert forbidden.status_code == 403

    listed = await client.get("/connections/admin/all?limit=10", headers=admin["headers"])
    assert listed.status_code == 200
    data = listed.json()
    assert data["total"] == 1
    assert data["connections"][0]["dom"]["email"] == "dom@example.com"
    assert data["connections"][0]["sub"]["email"] == "pet@example.com"

    terminated = await client.post(
        f"/connections/admin/{connection_id}/terminate", headers=admin["headers"]
    )
    assert terminated.status_code == 200

    repeat = await client.post(
        f"/connections/admin/{connection_id}/terminate", headers=admin["headers"]
    )
    assert repeat.status_code == 409
    assert repeat.json()["error"]["code"] == "CONNECTION_NOT_ACTIVE"
