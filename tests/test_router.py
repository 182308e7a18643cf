"""Event router tests — selector resolution and fan-out."""

import json

import pytest

from fastfood.auth.jwt import Identity, Role
from fastfood.events.types import MENU_UPDATE, NEW_ORDER, ORDER_STATUS_UPDATE
from fastfood.realtime.registry import ConnectionRegistry
from fastfood.realtime.router import (
    TO_ALL_ADMINS,
    TO_ALL_CONNECTED,
    Event,
    EventRouter,
    ToUser,
)


@pytest.fixture()
def wired(make_connection):
    """Registry with two customers and one admin online."""
    registry = ConnectionRegistry()
    conns = {
        "alice": make_connection("alice"),
        "bob": make_connection("bob"),
        "boss": make_connection("boss"),
    }
    registry.register(Identity("alice", Role.USER), conns["alice"])
    registry.register(Identity("bob", Role.USER), conns["bob"])
    registry.register(Identity("boss", Role.ADMIN), conns["boss"])
    return EventRouter(registry), conns


def test_event_serialization_is_flat():
    frame = Event(NEW_ORDER, {"order": {"id": "42", "total_amount": 9.5}}).serialize()
    assert json.loads(frame) == {
        "type": "NEW_ORDER",
        "order": {"id": "42", "total_amount": 9.5},
    }


def test_event_without_payload():
    assert json.loads(Event(MENU_UPDATE).serialize()) == {"type": "MENU_UPDATE"}


@pytest.mark.asyncio
async def test_to_user_reaches_only_that_user(wired):
    router, conns = wired
    sent = await router.dispatch(ToUser("alice"), Event(ORDER_STATUS_UPDATE, {"x": 1}))

    assert sent == 1
    assert conns["alice"].frames() == [{"type": "ORDER_STATUS_UPDATE", "x": 1}]
    assert conns["bob"].sent == []
    assert conns["boss"].sent == []


@pytest.mark.asyncio
async def test_to_all_admins(wired):
    router, conns = wired
    sent = await router.dispatch(TO_ALL_ADMINS, Event(NEW_ORDER))

    assert sent == 1
    assert conns["boss"].frames() == [{"type": "NEW_ORDER"}]
    assert conns["alice"].sent == [] and conns["bob"].sent == []


@pytest.mark.asyncio
async def test_to_all_connected_sends_identical_frame(wired):
    router, conns = wired
    sent = await router.dispatch(TO_ALL_CONNECTED, Event(MENU_UPDATE))

    assert sent == 3
    frames = {c.sent[0] for c in conns.values()}
    assert frames == {'{"type":"MENU_UPDATE"}'}


@pytest.mark.asyncio
async def test_offline_user_is_not_an_error(wired):
    router, _ = wired
    assert await router.dispatch(ToUser("carol"), Event(ORDER_STATUS_UPDATE)) == 0


@pytest.mark.asyncio
async def test_no_admins_online(make_connection):
    registry = ConnectionRegistry()
    registry.register(Identity("alice", Role.USER), make_connection())
    assert await EventRouter(registry).dispatch(TO_ALL_ADMINS, Event(NEW_ORDER)) == 0


@pytest.mark.asyncio
async def test_closed_connection_is_skipped(wired):
    router, conns = wired
    conns["bob"].open = False

    sent = await router.dispatch(TO_ALL_CONNECTED, Event(MENU_UPDATE))

    assert sent == 2
    assert conns["bob"].sent == []


@pytest.mark.asyncio
async def test_failing_send_does_not_block_others(make_connection):
    registry = ConnectionRegistry()
    broken = make_connection("broken", fail_on_send=True)
    healthy = make_connection("healthy")
    registry.register(Identity("a", Role.ADMIN), broken)
    registry.register(Identity("b", Role.ADMIN), healthy)

    sent = await EventRouter(registry).dispatch(TO_ALL_ADMINS, Event(NEW_ORDER))

    assert sent == 1
    assert healthy.frames() == [{"type": "NEW_ORDER"}]


def test_resolve_rejects_unknown_selector():
    with pytest.raises(TypeError):
        EventRouter(ConnectionRegistry()).resolve("everyone")


@pytest.mark.asyncio
async def test_dispatch_after_supersede_goes_to_new_connection(make_connection):
    registry = ConnectionRegistry()
    old, new = make_connection("old"), make_connection("new")
    identity = Identity("alice", Role.USER)
    registry.register(identity, old)
    registry.register(identity, new)

    await EventRouter(registry).dispatch(ToUser("alice"), Event(ORDER_STATUS_UPDATE))

    assert old.sent == []
    assert new.frames() == [{"type": "ORDER_STATUS_UPDATE"}]
