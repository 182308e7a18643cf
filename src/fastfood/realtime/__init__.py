"""Real-time infrastructure — in-process connection registry + WebSocket.

Learn: Events flow through three pieces:
1. Gateway — authenticates a WebSocket handshake and registers it
2. Registry — maps subject ids (and the admin group) to live connections
3. Router — services call dispatch() after a database write; the router
   resolves the target selector against the registry and pushes the event

Delivery is best effort: if the recipient is offline the event is dropped
(the frontend can always query the API to catch up).
"""

from fastfood.realtime.registry import ConnectionRegistry
from fastfood.realtime.router import (
    TO_ALL_ADMINS,
    TO_ALL_CONNECTED,
    Event,
    EventRouter,
    ToAllAdmins,
    ToAllConnected,
    ToUser,
)

__all__ = [
    "ConnectionRegistry",
    "Event",
    "EventRouter",
    "TO_ALL_ADMINS",
    "TO_ALL_CONNECTED",
    "ToAllAdmins",
    "ToAllConnected",
    "ToUser",
]
