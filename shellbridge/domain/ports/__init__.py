"""Domain ports - interfaces for infrastructure to implement."""

from .knowledge_port import KnowledgeStore
from .terminal_socket import CloseHandler, MessageHandler, SocketDialer, TerminalSocket

__all__ = [
    "TerminalSocket",
    "SocketDialer",
    "MessageHandler",
    "CloseHandler",
    "KnowledgeStore",
]
