"""Health endpoint tests."""

import pytest

from fastfood.auth.jwt import Identity, Role


@pytest.mark.asyncio
async def test_root_liveness(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.text == "Fast Food Backend API is running!"


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint reports server status even when dependencies are down."""
    r = await client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["server"] == "ok"
    assert "version" in data
    assert data["status"] in ("healthy", "degraded")
    assert data["websocket_connections"] == 0


@pytest.mark.asyncio
async def test_health_counts_connections(client, registry, make_connection):
    registry.register(Identity("alice", Role.USER), make_connection())
    registry.register(Identity("boss", Role.ADMIN), make_connection())

    r = await client.get("/api/health")
    assert r.json()["websocket_connections"] == 2
