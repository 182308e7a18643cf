"""Connection capability — what the registry and router need from a socket.

Learn: The registry and router never touch Starlette directly. They only
need send / is_open / close plus close and error subscriptions, so a
test double with the same surface can stand in for a real WebSocket.
"""

from typing import Any, Callable, Protocol

import structlog
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

logger = structlog.get_logger()

CloseHandler = Callable[[], Any]
ErrorHandler = Callable[[BaseException], Any]


class Connection(Protocol):
    @property
    def is_open(self) -> bool: ...

    async def send(self, text: str) -> None: ...

    async def close(self, code: int = 1000, reason: str = "") -> None: ...

    def on_close(self, handler: CloseHandler) -> None: ...

    def on_error(self, handler: ErrorHandler) -> None: ...


class WebSocketConnection:
    """Adapts a Starlette WebSocket to the Connection interface.

    The gateway's receive loop reports lifecycle events through
    mark_closed() and mark_error(); subscribed handlers run from there.
    Close handlers fire at most once.
    """

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self._close_handlers: list[CloseHandler] = []
        self._error_handlers: list[ErrorHandler] = []
        self._closed = False

    def __repr__(self) -> str:
        client = self.websocket.client
        peer = f"{client.host}:{client.port}" if client else "unknown"
        return f"<WebSocketConnection {peer} open={self.is_open}>"

    @property
    def is_open(self) -> bool:
        return (
            not self._closed
            and self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        )

    async def send(self, text: str) -> None:
        await self.websocket.send_text(text)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self.is_open:
            try:
                await self.websocket.close(code=code, reason=reason)
            except (RuntimeError, WebSocketDisconnect) as e:
                # Peer already gone
                logger.debug("ws.close_failed", connection=repr(self), error=str(e))
        self.mark_closed()

    def on_close(self, handler: CloseHandler) -> None:
        self._close_handlers.append(handler)

    def on_error(self, handler: ErrorHandler) -> None:
        self._error_handlers.append(handler)

    def mark_closed(self) -> None:
        if self._closed:
            return
        self._closed = True
        for handler in self._close_handlers:
            handler()

    def mark_error(self, exc: BaseException) -> None:
        for handler in self._error_handlers:
            handler(exc)
