"""Connection manager - lifecycle of the persistent terminal socket."""

import asyncio
import logging
from datetime import UTC, datetime

from shellbridge.domain import (
    OUTPUT_TYPE,
    Connection,
    ConnectionState,
    ConnectError,
    ConnectTimeout,
    RawFrame,
    SessionState,
    SocketDialer,
    TerminalTarget,
    Timer,
    decode_frame,
    scrub,
)
from shellbridge.domain.values import DEFAULT_MODE

logger = logging.getLogger(__name__)

# Constants
CONNECT_TIMEOUT = 10.0  # seconds


class AsyncioTimer:
    """Timer implementation using asyncio event loop time."""

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ConnectionManager:
    """Owns the single connection to the remote terminal.

    State machine: disconnected -> connecting -> connected, falling back
    to disconnected on error, timeout or close. There is no background
    reconnect; the next call to ensure_connected dials again.
    """

    def __init__(
        self,
        state: SessionState,
        dialer: SocketDialer,
        base_url: str,
        default_path: str,
        mode: str = DEFAULT_MODE,
        connect_timeout: float = CONNECT_TIMEOUT,
        timer: Timer | None = None,
    ) -> None:
        self._state = state
        self._dialer = dialer
        self._base_url = base_url
        self._default_path = default_path
        self._mode = mode
        self._connect_timeout = connect_timeout
        self._timer = timer or AsyncioTimer()
        self._pending: asyncio.Future[Connection] | None = None
        self.dial_count = 0

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def current_target(self) -> TerminalTarget:
        """Target of the live connection, else the last or default one."""
        if self._state.connection is not None:
            return self._state.connection.target
        return self._state.target or self._build_target(None)

    async def ensure_connected(self, target_path: str | None = None) -> Connection:
        """Return the live connection, dialing if there is none.

        A connected session is reused even when ``target_path`` names a
        different target.

        Raises:
            ConnectTimeout: No open or error before the deadline.
            ConnectError: Transport-level failure while dialing.
        """
        connection = self._state.connection
        if connection is not None and connection.state is ConnectionState.CONNECTED:
            if target_path and target_path != connection.target.path:
                logger.warning(
                    "Reusing live connection target=%s requested=%s",
                    connection.target.path,
                    target_path,
                )
            return connection

        if self._pending is not None and not self._pending.done():
            return await asyncio.shield(self._pending)

        target = self._build_target(target_path)
        connection = Connection(target=target, created_at=datetime.now(UTC))
        self._state.connection = connection
        self.dial_count += 1

        logger.info("Dialing terminal url=%s attempt=%d", target.url, self.dial_count)
        pending = asyncio.ensure_future(self._dial(connection))
        self._pending = pending
        try:
            return await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending:
                self._pending = None

    async def _dial(self, connection: Connection) -> Connection:
        url = connection.target.url
        dial = asyncio.ensure_future(
            self._dialer(
                url,
                on_message=lambda message: self.handle_message(connection, message),
                on_close=lambda: self.handle_close(connection),
            )
        )
        deadline = asyncio.ensure_future(self._timer.sleep(self._connect_timeout))
        try:
            done, _ = await asyncio.wait({dial, deadline}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            deadline.cancel()

        if dial not in done:
            dial.cancel()
            self._abandon(connection)
            await self._close_late_socket(dial)
            logger.error("Terminal connect timed out url=%s", url)
            raise ConnectTimeout(url, self._connect_timeout)

        try:
            socket = dial.result()
        except ConnectError:
            self._abandon(connection)
            logger.error("Terminal connect failed url=%s", url)
            raise
        except OSError as e:
            self._abandon(connection)
            logger.error("Terminal connect failed url=%s: %s", url, e)
            raise ConnectError(url, str(e)) from e
        except Exception:
            self._abandon(connection)
            logger.exception("Unexpected error dialing terminal url=%s", url)
            raise

        # Socket may have closed between open and here
        if connection.state is not ConnectionState.CONNECTING:
            raise ConnectError(url, "connection closed during handshake")

        connection.attach(socket)
        self._state.target = connection.target
        logger.info("Terminal connected url=%s", url)
        return connection

    async def _close_late_socket(self, dial: asyncio.Future) -> None:
        """Close a socket whose dial finished despite being cancelled."""
        await asyncio.wait({dial})
        if dial.cancelled() or dial.exception() is not None:
            return
        logger.info("Closing socket opened after connect deadline")
        await dial.result().close()

    def _abandon(self, connection: Connection) -> None:
        connection.mark_errored()
        if self._state.connection is connection:
            self._state.clear_connection()

    def handle_message(self, connection: Connection, message: str | bytes) -> None:
        """Route one inbound frame into the output buffer."""
        if self._state.connection is not connection:
            logger.debug("Dropping frame from stale connection")
            return

        frame = decode_frame(message)
        if isinstance(frame, RawFrame):
            # Unframed payloads are kept as-is rather than lost
            self._state.buffer.append(frame.text)
        elif frame.type == OUTPUT_TYPE:
            self._state.buffer.append(scrub(frame.text))
        else:
            logger.debug("Ignoring frame type=%s", frame.type)

    def handle_close(self, connection: Connection) -> None:
        """Mark the connection closed and release it."""
        connection.mark_disconnected()
        if self._state.connection is connection:
            self._state.clear_connection()
            logger.info("Terminal disconnected url=%s", connection.target.url)

    async def disconnect(self) -> None:
        """Close the live socket, if any."""
        connection = self._state.connection
        if connection is None:
            return
        socket = connection.socket
        self.handle_close(connection)
        if socket is not None:
            await socket.close()

    def _build_target(self, target_path: str | None) -> TerminalTarget:
        if target_path:
            path = target_path
        elif self._state.target is not None:
            path = self._state.target.path
        else:
            path = self._default_path
        return TerminalTarget(base_url=self._base_url, path=path, mode=self._mode)
