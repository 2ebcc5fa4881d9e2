"""WebSocket adapter - implements the terminal socket port with websockets."""

import asyncio
import logging

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, WebSocketException

from shellbridge.domain import ConnectError, WriteFailure
from shellbridge.domain.ports import CloseHandler, MessageHandler

logger = logging.getLogger(__name__)


class WebSocketTerminalSocket:
    """Adapts a websockets client connection to the TerminalSocket port."""

    def __init__(self, websocket) -> None:
        self._websocket = websocket
        self._reader: asyncio.Task | None = None

    def start(self, on_message: MessageHandler, on_close: CloseHandler) -> None:
        """Start delivering inbound frames."""
        self._reader = asyncio.create_task(self._read_loop(on_message, on_close))

    async def _read_loop(self, on_message: MessageHandler, on_close: CloseHandler) -> None:
        try:
            async for message in self._websocket:
                on_message(message)
        except ConnectionClosedError as e:
            logger.warning("Terminal socket closed with error code=%s", e.rcvd and e.rcvd.code)
        finally:
            on_close()

    async def send_text(self, data: str) -> None:
        try:
            await self._websocket.send(data)
        except (ConnectionClosed, OSError) as e:
            raise WriteFailure(f"Terminal socket write failed: {e}") from e

    async def close(self) -> None:
        await self._websocket.close()
        if self._reader is not None:
            try:
                await self._reader
            except asyncio.CancelledError:
                pass


class WebSocketDialer:
    """SocketDialer backed by ``websockets.connect``.

    The connect deadline is enforced by the connection manager, so the
    library's own open timeout is disabled.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._max_size = max_size

    async def __call__(
        self,
        url: str,
        on_message: MessageHandler,
        on_close: CloseHandler,
    ) -> WebSocketTerminalSocket:
        try:
            websocket = await websockets.connect(
                url,
                open_timeout=None,
                max_size=self._max_size,
            )
        except (OSError, WebSocketException) as e:
            raise ConnectError(url, str(e) or type(e).__name__) from e

        socket = WebSocketTerminalSocket(websocket)
        socket.start(on_message, on_close)
        return socket
