"""Session state - the single terminal session owned by the process."""

from dataclasses import dataclass, field

from ..values.terminal_target import TerminalTarget
from .connection import Connection, ConnectionState
from .output_buffer import OutputBuffer


@dataclass
class SessionState:
    """Current connection, output buffer and last established target.

    One instance is created by the composition root and shared by the
    connection manager, dispatcher and tool router.
    """

    buffer: OutputBuffer = field(default_factory=OutputBuffer)
    connection: Connection | None = None
    target: TerminalTarget | None = None

    @property
    def connected(self) -> bool:
        """Synchronous status check mirrored from the connection state."""
        return (
            self.connection is not None
            and self.connection.state is ConnectionState.CONNECTED
        )

    @property
    def state(self) -> ConnectionState:
        if self.connection is None:
            return ConnectionState.DISCONNECTED
        return self.connection.state

    def clear_connection(self) -> None:
        self.connection = None
