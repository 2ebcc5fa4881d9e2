"""Tool router - maps assistant tool calls onto bridge operations."""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from shellbridge.domain import (
    BridgeError,
    InvalidArguments,
    KnowledgeStore,
    SessionState,
    UnknownTool,
)

from .briefing import format_briefing, format_ports, to_json
from .command_dispatcher import CommandDispatcher
from .connection_manager import ConnectionManager

logger = logging.getLogger(__name__)

NO_OUTPUT = "(no output yet)"
EMPTY_BUFFER = "(empty)"
TODO_STATUSES = ("pending", "in_progress", "completed", "all")

Handler = Callable[[dict[str, Any]], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Name, description and JSON schema of one exposed tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Response envelope returned for every tool call."""

    text: str
    is_error: bool = False


def _object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


TERMINAL_TOOLS = [
    ToolSpec(
        name="connect",
        description=(
            "Connect to the remote terminal. Reuses the live connection if one "
            "is already open."
        ),
        input_schema=_object_schema(
            {"project": {"type": "string", "description": "Target project path"}}
        ),
    ),
    ToolSpec(
        name="send",
        description=(
            "Type a command into the remote terminal, press Enter, wait and "
            "return the output produced during the wait."
        ),
        input_schema=_object_schema(
            {
                "command": {"type": "string", "description": "Text to send"},
                "waitMs": {
                    "type": "number",
                    "description": "Milliseconds to collect output (default 5000)",
                },
            },
            required=["command"],
        ),
    ),
    ToolSpec(
        name="output",
        description="Read the output collected since the last command.",
        input_schema=_object_schema(
            {"lines": {"type": "number", "description": "Only return the last N lines"}}
        ),
    ),
    ToolSpec(
        name="status",
        description="Show whether the remote terminal is connected.",
    ),
]

KNOWLEDGE_TOOLS = [
    ToolSpec(
        name="get_briefing",
        description=(
            "Get a context briefing: last session, pending todos and port "
            "assignments. Call at the start of a session to restore memory."
        ),
        input_schema=_object_schema(
            {"project": {"type": "string", "description": "Project path"}}
        ),
    ),
    ToolSpec(
        name="get_todos",
        description="Get todos for a project.",
        input_schema=_object_schema(
            {
                "project": {"type": "string", "description": "Project path"},
                "status": {
                    "type": "string",
                    "enum": list(TODO_STATUSES),
                    "description": "Filter by status (defaults to pending)",
                },
            }
        ),
    ),
    ToolSpec(
        name="search_knowledge",
        description="Search the knowledge base.",
        input_schema=_object_schema(
            {
                "query": {"type": "string", "description": "Search query"},
                "category": {
                    "type": "string",
                    "description": 'Optional category filter (e.g. "architecture", "bug-fix")',
                },
            },
            required=["query"],
        ),
    ),
    ToolSpec(
        name="log_session",
        description="Log session activity for memory persistence.",
        input_schema=_object_schema(
            {
                "project": {"type": "string", "description": "Project path"},
                "summary": {"type": "string", "description": "What was accomplished"},
                "messages": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "role": {"type": "string", "enum": ["user", "assistant"]},
                            "content": {"type": "string"},
                        },
                    },
                    "description": "Key conversation messages to remember",
                },
            },
            required=["summary"],
        ),
    ),
    ToolSpec(
        name="add_knowledge",
        description="Add a knowledge entry for future reference.",
        input_schema=_object_schema(
            {
                "title": {"type": "string", "description": "Entry title"},
                "content": {"type": "string", "description": "Entry content"},
                "category": {
                    "type": "string",
                    "description": 'Category (e.g. "architecture", "config", "workflow")',
                },
                "project": {"type": "string", "description": "Project path"},
            },
            required=["title", "content", "category"],
        ),
    ),
    ToolSpec(
        name="get_ports",
        description="Get the port assignments for services in the dev environment.",
    ),
]


def _require_str(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidArguments(f"'{key}' is required and must be a non-empty string")
    return value


def _optional_str(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidArguments(f"'{key}' must be a string")
    return value


def _optional_int(arguments: dict[str, Any], key: str) -> int | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidArguments(f"'{key}' must be a number")
    return int(value)


class ToolRouter:
    """Dispatches named tool calls and wraps results in ToolResult.

    ``call`` never raises; failures come back as error results.
    """

    def __init__(
        self,
        state: SessionState,
        connection_manager: ConnectionManager,
        dispatcher: CommandDispatcher,
        knowledge_store: KnowledgeStore | None = None,
        default_project: str = "",
    ) -> None:
        self._state = state
        self._connection_manager = connection_manager
        self._dispatcher = dispatcher
        self._knowledge_store = knowledge_store
        self._default_project = default_project

        self._handlers: dict[str, Handler] = {
            "connect": self._connect,
            "send": self._send,
            "output": self._output,
            "get-output": self._output,
            "status": self._status,
        }
        self._tools = list(TERMINAL_TOOLS)
        if knowledge_store is not None:
            self._handlers.update(
                {
                    "get_briefing": self._get_briefing,
                    "get_todos": self._get_todos,
                    "search_knowledge": self._search_knowledge,
                    "log_session": self._log_session,
                    "add_knowledge": self._add_knowledge,
                    "get_ports": self._get_ports,
                }
            )
            self._tools += KNOWLEDGE_TOOLS

    def list_tools(self) -> list[ToolSpec]:
        """Tools exposed to the assistant."""
        return list(self._tools)

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Run a tool and return its result envelope."""
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownTool(name)
            text = await handler(arguments or {})
        except BridgeError as e:
            logger.warning("Tool failed tool=%s error=%s", name, e)
            return ToolResult(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("Tool crashed tool=%s", name)
            return ToolResult(f"Error: {e}", is_error=True)
        return ToolResult(text)

    # Terminal tools

    async def _connect(self, arguments: dict[str, Any]) -> str:
        project = _optional_str(arguments, "project")
        connection = await self._connection_manager.ensure_connected(project)
        return (
            f"Connected to {self._connection_manager.base_url} "
            f"(target: {connection.target.path})"
        )

    async def _send(self, arguments: dict[str, Any]) -> str:
        command = arguments.get("command")
        if not isinstance(command, str):
            raise InvalidArguments("'command' is required and must be a string")
        output = await self._dispatcher.send(command, _optional_int(arguments, "waitMs"))
        return output or NO_OUTPUT

    async def _output(self, arguments: dict[str, Any]) -> str:
        lines = _optional_int(arguments, "lines")
        return self._state.buffer.snapshot(lines) or EMPTY_BUFFER

    async def _status(self, arguments: dict[str, Any]) -> str:
        target = self._connection_manager.current_target
        return json.dumps(
            {
                "connected": self._state.connected,
                "wsUrl": target.url,
                "target": target.path,
                "bufferSize": self._state.buffer.size,
            },
            indent=2,
        )

    # Knowledge-store tools

    def _project(self, arguments: dict[str, Any]) -> str:
        return _optional_str(arguments, "project") or self._default_project

    async def _get_briefing(self, arguments: dict[str, Any]) -> str:
        context = await self._knowledge_store.get_context(self._project(arguments))
        return format_briefing(context)

    async def _get_todos(self, arguments: dict[str, Any]) -> str:
        status = _optional_str(arguments, "status") or "pending"
        if status not in TODO_STATUSES:
            raise InvalidArguments(f"'status' must be one of {', '.join(TODO_STATUSES)}")
        data = await self._knowledge_store.get_todos(self._project(arguments), status)
        return to_json(data)

    async def _search_knowledge(self, arguments: dict[str, Any]) -> str:
        data = await self._knowledge_store.search_knowledge(
            _require_str(arguments, "query"),
            _optional_str(arguments, "category"),
        )
        return to_json(data)

    async def _log_session(self, arguments: dict[str, Any]) -> str:
        messages = arguments.get("messages") or []
        if not isinstance(messages, list):
            raise InvalidArguments("'messages' must be a list")
        data = await self._knowledge_store.log_session(
            {
                "project": self._project(arguments),
                "summary": _require_str(arguments, "summary"),
                "messages": messages,
            }
        )
        return f"Session logged: {json.dumps(data)}"

    async def _add_knowledge(self, arguments: dict[str, Any]) -> str:
        data = await self._knowledge_store.add_knowledge(
            {
                "project": self._project(arguments),
                "title": _require_str(arguments, "title"),
                "content": _require_str(arguments, "content"),
                "category": _require_str(arguments, "category"),
            }
        )
        return f"Knowledge added: {json.dumps(data)}"

    async def _get_ports(self, arguments: dict[str, Any]) -> str:
        return format_ports(await self._knowledge_store.get_ports())
