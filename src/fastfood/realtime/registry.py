"""Connection registry — who is connected right now.

Learn: Two collections, always updated together by register/unregister:
- by_user: subject id → its single live connection
- admins: every connection opened with an admin token

Everything runs on the event loop and none of these methods await, so a
register/unregister can never interleave with another one or with a
snapshot read. No lock needed.
"""

from typing import Optional

import structlog

from fastfood.auth.jwt import Identity
from fastfood.realtime.connection import Connection

logger = structlog.get_logger()


class ConnectionRegistry:
    """In-memory mapping of subject identities to live connections."""

    def __init__(self):
        self._by_user: dict[str, Connection] = {}
        self._admins: set[Connection] = set()

    def __len__(self) -> int:
        return len(self._by_user)

    def register(self, identity: Identity, connection: Connection) -> Optional[Connection]:
        """Map the identity to this connection.

        Returns the connection it superseded (if any and different) so the
        caller can close it. The superseded connection leaves the admin
        group immediately.
        """
        previous = self._by_user.get(identity.subject_id)
        self._by_user[identity.subject_id] = connection
        if previous is not None and previous is not connection:
            self._admins.discard(previous)
        else:
            previous = None

        if identity.is_admin:
            self._admins.add(connection)
        else:
            self._admins.discard(connection)

        logger.info(
            "ws.registered",
            subject_id=identity.subject_id,
            role=identity.role.value,
            superseded=previous is not None,
        )
        return previous

    def unregister(self, identity: Identity, connection: Connection) -> None:
        """Drop the connection. A stale connection never evicts its successor."""
        if self._by_user.get(identity.subject_id) is connection:
            del self._by_user[identity.subject_id]
            logger.info("ws.unregistered", subject_id=identity.subject_id)
        else:
            logger.debug("ws.unregister_stale", subject_id=identity.subject_id)
        self._admins.discard(connection)

    def lookup(self, subject_id: str) -> Optional[Connection]:
        return self._by_user.get(subject_id)

    def all_connected(self) -> list[Connection]:
        return list(self._by_user.values())

    def all_admins(self) -> list[Connection]:
        return list(self._admins)

    async def close_all(self, code: int = 1001, reason: str = "Server shutting down") -> None:
        """Best-effort close of every tracked connection (used at shutdown)."""
        connections = {*self._by_user.values(), *self._admins}
        for connection in connections:
            try:
                await connection.close(code=code, reason=reason)
            except Exception as e:
                logger.warning("ws.shutdown_close_failed", error=str(e))
        self._by_user.clear()
        self._admins.clear()
