"""WebSocket endpoint — authenticated real-time event delivery.

Learn: Each client connects to /ws?token=JWT. The gateway:
1. Rejects the handshake (close 4001) if the token is missing or invalid
2. Accepts the socket and registers it under the token's identity
3. Binds one idempotent teardown to the connection's close AND error
   events, so the registry entry is dropped exactly once
4. Reads incoming frames until the client goes away (pings get a pong)

Events are pushed from the outside by EventRouter.dispatch(); this loop
only keeps the connection alive and notices when it dies.
"""

import json
from typing import Callable

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from fastfood.auth.jwt import Identity, InvalidCredential, verify_identity
from fastfood.realtime.connection import Connection, WebSocketConnection
from fastfood.realtime.registry import ConnectionRegistry

logger = structlog.get_logger()
router = APIRouter()

WS_SUPERSEDED = 4000
WS_AUTH_FAILED = 4001
WS_INTERNAL_ERROR = 1011


class RealtimeGateway:
    """Handshake, registration and teardown for real-time connections."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        verifier: Callable[[str], Identity] = verify_identity,
    ):
        self.registry = registry
        self.verifier = verifier

    async def serve(self, websocket: WebSocket) -> None:
        # ── Authentication ──────────────────────────────────────
        token = websocket.query_params.get("token")
        if not token:
            logger.info("ws.rejected", reason="missing token")
            await websocket.close(code=WS_AUTH_FAILED, reason="Authentication required")
            return

        try:
            identity = self.verifier(token)
        except InvalidCredential as e:
            logger.info("ws.rejected", reason=str(e))
            await websocket.close(code=WS_AUTH_FAILED, reason="Invalid or expired token")
            return

        # ── Connection accepted ─────────────────────────────────
        await websocket.accept()
        connection = WebSocketConnection(websocket)
        log = logger.bind(subject_id=identity.subject_id, role=identity.role.value)

        superseded = self.registry.register(identity, connection)
        self._bind_teardown(identity, connection)
        log.info("ws.connected", connected=len(self.registry))

        if superseded is not None:
            await self._close_superseded(superseded, log)

        try:
            await self._receive_loop(connection)
        except WebSocketDisconnect:
            pass
        except Exception as e:
            log.warning("ws.error", error=str(e))
            connection.mark_error(e)
            await connection.close(code=WS_INTERNAL_ERROR, reason="Internal error")
        finally:
            connection.mark_closed()
            log.info("ws.disconnected", connected=len(self.registry))

    async def _close_superseded(self, superseded: Connection, log) -> None:
        try:
            await superseded.close(
                code=WS_SUPERSEDED, reason="Superseded by a newer connection"
            )
        except Exception as e:
            # Old peer already gone
            log.info("ws.supersede_close_failed", error=str(e))

    def _bind_teardown(self, identity: Identity, connection: WebSocketConnection) -> None:
        """Unregister exactly once, however many close/error events fire."""
        done = False

        def teardown() -> None:
            nonlocal done
            if done:
                return
            done = True
            self.registry.unregister(identity, connection)

        connection.on_close(teardown)
        connection.on_error(lambda exc: teardown())

    async def _receive_loop(self, connection: WebSocketConnection) -> None:
        """Read client frames until disconnect. Only pings need an answer."""
        websocket = connection.websocket
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            text = message.get("text")
            if not text:
                continue
            try:
                msg = json.loads(text)
            except json.JSONDecodeError:
                continue
            if isinstance(msg, dict) and msg.get("type") == "ping":
                await connection.send(json.dumps({"type": "pong"}))


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket):
    """WebSocket endpoint for real-time order and menu events.

    Authentication: access token required as ?token= query param.
    """
    gateway: RealtimeGateway = websocket.app.state.gateway
    await gateway.serve(websocket)
