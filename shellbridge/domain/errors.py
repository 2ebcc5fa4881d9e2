"""Domain error taxonomy."""


class BridgeError(Exception):
    """Base class for errors surfaced to tool callers."""


class ConnectTimeout(BridgeError):
    """Neither open nor error was reported before the connect deadline."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Connection to {url} timed out after {timeout:g}s")
        self.url = url
        self.timeout = timeout


class ConnectError(BridgeError):
    """Transport-level failure while dialing the terminal endpoint."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not connect to {url}: {reason}")
        self.url = url
        self.reason = reason


class WriteFailure(BridgeError):
    """Socket was not writable when an input frame was sent."""


class UnknownTool(BridgeError):
    """Tool name has no mapping."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(BridgeError):
    """Tool arguments are missing or of the wrong type."""


class KnowledgeStoreError(BridgeError):
    """Knowledge-store API returned a non-2xx status or was unreachable."""
