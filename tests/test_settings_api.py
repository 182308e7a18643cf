"""Restaurant settings API tests."""

import pytest

from fastfood.auth.jwt import Identity, Role


@pytest.mark.asyncio
async def test_defaults_created_on_first_read(client):
    r = await client.get("/api/settings")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == "main_settings"
    assert sorted(data["hours"]) == ["1", "2", "3", "4", "5", "6", "7"]
    assert data["hours"]["1"] == {"is_open": True, "open_time": "11:00", "close_time": "22:00"}
    assert data["hours"]["5"]["close_time"] == "23:00"
    assert data["hours"]["7"]["is_open"] is False


@pytest.mark.asyncio
async def test_update_merges_and_broadcasts(client, admin_headers, registry, make_connection):
    listener = make_connection()
    registry.register(Identity("listener", Role.USER), listener)

    r = await client.post(
        "/api/settings",
        json={"hours": {"7": {"is_open": True, "open_time": "12:00", "close_time": "20:00"}}},
        headers=admin_headers,
    )
    assert r.status_code == 200
    hours = r.json()["hours"]
    assert hours["7"] == {"is_open": True, "open_time": "12:00", "close_time": "20:00"}
    # Days not sent are left alone
    assert hours["1"]["close_time"] == "22:00"

    frames = listener.frames()
    assert len(frames) == 1
    assert frames[0]["type"] == "SETTINGS_UPDATED"
    assert frames[0]["settings"]["hours"]["7"]["open_time"] == "12:00"

    # Persisted
    assert (await client.get("/api/settings")).json()["hours"]["7"]["is_open"] is True


@pytest.mark.asyncio
async def test_update_requires_admin(client, user_headers):
    r = await client.post(
        "/api/settings",
        json={"hours": {"1": {"is_open": False}}},
        headers=user_headers,
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_update_rejects_unknown_weekday(client, admin_headers):
    r = await client.post(
        "/api/settings",
        json={"hours": {"8": {"is_open": True}}},
        headers=admin_headers,
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_update_rejects_bad_time(client, admin_headers):
    r = await client.post(
        "/api/settings",
        json={"hours": {"1": {"is_open": True, "open_time": "25:00", "close_time": "22:00"}}},
        headers=admin_headers,
    )
    assert r.status_code == 422
