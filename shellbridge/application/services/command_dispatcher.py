"""Command dispatcher - send input and collect a quiescence window of output."""

import asyncio
import logging

from shellbridge.domain import SessionState, Timer, WriteFailure, encode_input

from .connection_manager import AsyncioTimer, ConnectionManager

logger = logging.getLogger(__name__)

# Constants
DEFAULT_WAIT_MS = 5000
SUBMIT_KEY = "\r"


class CommandDispatcher:
    """Sends commands to the remote terminal.

    There is no completion signal from the remote side: after writing
    the command the dispatcher waits a fixed window and returns whatever
    output arrived in the meantime.

    Calls are serialized. A second ``send`` issued while a window is
    open waits for that window to close before it resets the buffer, so
    each result only ever holds its own command's output.
    """

    def __init__(
        self,
        state: SessionState,
        connection_manager: ConnectionManager,
        default_wait_ms: int = DEFAULT_WAIT_MS,
        timer: Timer | None = None,
    ) -> None:
        self._state = state
        self._connection_manager = connection_manager
        self._default_wait_ms = default_wait_ms
        self._timer = timer or AsyncioTimer()
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """True while a command window is open."""
        return self._lock.locked()

    async def send(self, command: str, wait_ms: int | None = None) -> str:
        """Send a command and return the output collected during the window.

        Args:
            command: Text to type into the remote terminal.
            wait_ms: Window length in milliseconds, default from config.

        Returns:
            Output received during the window, possibly empty.

        Raises:
            ConnectTimeout, ConnectError: If no connection can be made.
            WriteFailure: If the socket cannot be written to.
        """
        window = self._default_wait_ms if wait_ms is None else max(0, wait_ms)

        async with self._lock:
            connection = await self._connection_manager.ensure_connected()
            self._state.buffer.reset()

            socket = connection.socket
            if socket is None:
                raise WriteFailure("Terminal socket is not open")

            # Payload and submit key go out as separate keystrokes
            await socket.send_text(encode_input(command))
            await socket.send_text(encode_input(SUBMIT_KEY))
            logger.info(
                "Command sent target=%s chars=%d wait_ms=%d",
                connection.target.path,
                len(command),
                window,
            )

            await self._timer.sleep(window / 1000)
            return self._state.buffer.snapshot()
