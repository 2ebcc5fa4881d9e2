"""Terminal target value object."""

from dataclasses import dataclass
from urllib.parse import urlencode

DEFAULT_MODE = "mcp"


@dataclass(frozen=True, slots=True)
class TerminalTarget:
    """Address of the remote terminal: endpoint, logical path and mode tag."""

    base_url: str
    path: str
    mode: str = DEFAULT_MODE

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("Terminal base URL cannot be empty")
        if not self.path:
            raise ValueError("Terminal target path cannot be empty")

    @property
    def url(self) -> str:
        """Socket URL with the target path and mode as query parameters."""
        separator = "&" if "?" in self.base_url else "?"
        query = urlencode({"path": self.path, "mode": self.mode})
        return f"{self.base_url}{separator}{query}"

    def __str__(self) -> str:
        return self.path
