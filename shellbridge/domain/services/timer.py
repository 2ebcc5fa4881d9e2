"""Timer port for connect deadlines and quiescence windows."""

from typing import Protocol


class Timer(Protocol):
    """Protocol for time sources that can also suspend the caller."""

    def now(self) -> float:
        """Current time in seconds."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the calling task for the given number of seconds."""
        ...
