"""Terminal socket port - interface for the persistent terminal connection."""

from collections.abc import Callable
from typing import Protocol

MessageHandler = Callable[[str | bytes], None]
CloseHandler = Callable[[], None]


class TerminalSocket(Protocol):
    """An open full-duplex connection to the remote terminal."""

    async def send_text(self, data: str) -> None:
        """Send one text frame.

        Raises:
            WriteFailure: If the socket is closed or the write fails.
        """
        ...

    async def close(self) -> None:
        """Close the connection."""
        ...


class SocketDialer(Protocol):
    """Opens terminal sockets.

    Implementations call ``on_message`` for each inbound frame in
    delivery order and ``on_close`` exactly once when the socket ends.
    """

    async def __call__(
        self,
        url: str,
        on_message: MessageHandler,
        on_close: CloseHandler,
    ) -> TerminalSocket:
        """Dial ``url`` and return once the socket is open.

        Raises:
            ConnectError: On transport-level failure.
        """
        ...
