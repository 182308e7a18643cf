"""Event router — push typed events to the right live connections.

Learn: Services call dispatch() right after committing a database write.
The selector says who should hear about it:
- ToUser(id)      → that subject's connection, if it is online
- TO_ALL_ADMINS   → every admin connection
- TO_ALL_CONNECTED → everyone

The event is serialized once and the same frame goes to every target.
Offline or closed targets are skipped; the router only reads the registry,
the gateway's close handler does the cleanup.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Union

import structlog
from starlette.requests import Request

from fastfood.realtime.connection import Connection
from fastfood.realtime.registry import ConnectionRegistry

logger = structlog.get_logger()


@dataclass(frozen=True)
class Event:
    """A typed notification. Wire form: {"type": ..., **payload}."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def serialize(self) -> str:
        return json.dumps(
            {"type": self.type, **self.payload}, separators=(",", ":"), default=str
        )


@dataclass(frozen=True)
class ToUser:
    subject_id: str


@dataclass(frozen=True)
class ToAllAdmins:
    pass


@dataclass(frozen=True)
class ToAllConnected:
    pass


TO_ALL_ADMINS = ToAllAdmins()
TO_ALL_CONNECTED = ToAllConnected()

Selector = Union[ToUser, ToAllAdmins, ToAllConnected]


class EventRouter:
    """Resolves selectors against the registry and sends events."""

    def __init__(self, registry: ConnectionRegistry):
        self.registry = registry

    def resolve(self, selector: Selector) -> list[Connection]:
        """Snapshot of open connections matching the selector."""
        if isinstance(selector, ToUser):
            connection = self.registry.lookup(selector.subject_id)
            candidates = [connection] if connection is not None else []
        elif isinstance(selector, ToAllAdmins):
            candidates = self.registry.all_admins()
        elif isinstance(selector, ToAllConnected):
            candidates = self.registry.all_connected()
        else:
            raise TypeError(f"Unknown selector: {selector!r}")
        return [c for c in candidates if c.is_open]

    async def dispatch(self, selector: Selector, event: Event) -> int:
        """Send the event to every open target. Returns the successful send count."""
        targets = self.resolve(selector)
        if not targets:
            logger.info(
                "events.target_unavailable",
                event_type=event.type,
                selector=repr(selector),
            )
            return 0

        frame = event.serialize()
        results = await asyncio.gather(
            *(self._send(c, frame, event.type) for c in targets)
        )
        sent = sum(results)
        logger.info(
            "events.dispatched",
            event_type=event.type,
            selector=repr(selector),
            targets=len(targets),
            sent=sent,
        )
        return sent

    async def _send(self, connection: Connection, frame: str, event_type: str) -> bool:
        if not connection.is_open:
            return False
        try:
            await connection.send(frame)
            return True
        except Exception as e:
            # Socket died mid-send; its close handler will deregister it
            logger.warning(
                "events.send_failed",
                event_type=event_type,
                connection=repr(connection),
                error=str(e),
            )
            return False


def get_event_router(request: Request) -> EventRouter:
    """FastAPI dependency — the router owned by this application instance."""
    return request.app.state.events
