"""Connection entity - one socket session to the remote terminal."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..ports.terminal_socket import TerminalSocket
from ..values.terminal_target import TerminalTarget


class ConnectionState(Enum):
    """Lifecycle states of a terminal connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERRORED = "errored"


@dataclass
class Connection:
    """A single dial of the terminal endpoint.

    Created in CONNECTING state by the connection manager. The socket
    handle is only present while CONNECTED.
    """

    target: TerminalTarget
    created_at: datetime
    state: ConnectionState = ConnectionState.CONNECTING
    socket: TerminalSocket | None = None

    @property
    def is_live(self) -> bool:
        """True while connecting or connected."""
        return self.state in (ConnectionState.CONNECTING, ConnectionState.CONNECTED)

    def attach(self, socket: TerminalSocket) -> None:
        """Record the opened socket and move to CONNECTED."""
        self.socket = socket
        self.state = ConnectionState.CONNECTED

    def mark_errored(self) -> None:
        self.socket = None
        self.state = ConnectionState.ERRORED

    def mark_disconnected(self) -> None:
        self.socket = None
        self.state = ConnectionState.DISCONNECTED
