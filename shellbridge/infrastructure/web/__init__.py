"""Web infrastructure - WebSocket client adapters."""

from .websocket_adapter import WebSocketDialer, WebSocketTerminalSocket

__all__ = [
    "WebSocketDialer",
    "WebSocketTerminalSocket",
]
