"""Application services - use case implementations."""

from .checkpoint_service import CheckpointService
from .command_dispatcher import CommandDispatcher
from .connection_manager import AsyncioTimer, ConnectionManager
from .tool_router import ToolResult, ToolRouter, ToolSpec

__all__ = [
    "AsyncioTimer",
    "CheckpointService",
    "CommandDispatcher",
    "ConnectionManager",
    "ToolResult",
    "ToolRouter",
    "ToolSpec",
]
