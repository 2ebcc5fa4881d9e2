"""Composition root - the ONLY place where dependencies are wired."""

from pathlib import Path

from shellbridge.application.services import (
    AsyncioTimer,
    CommandDispatcher,
    ConnectionManager,
    ToolRouter,
)
from shellbridge.config import Config, load_config
from shellbridge.container import Container
from shellbridge.domain import KnowledgeStore, OutputBuffer, SessionState, SocketDialer, Timer
from shellbridge.infrastructure.api import KnowledgeStoreClient
from shellbridge.infrastructure.web import WebSocketDialer


def create_knowledge_store(config: Config) -> KnowledgeStoreClient:
    """Create the knowledge-store HTTP client."""
    return KnowledgeStoreClient(config.knowledge.url, timeout=config.knowledge.timeout)


def create_container(
    config: Config | None = None,
    config_path: Path | str | None = None,
    dialer: SocketDialer | None = None,
    knowledge_store: KnowledgeStore | None = None,
    timer: Timer | None = None,
) -> Container:
    """Create the dependency container with all wired dependencies.

    This is the composition root - the single place where all
    dependencies are created and wired together.

    Args:
        config: Already loaded configuration; loaded from file if None.
        config_path: Path to config file, used when ``config`` is None.
        dialer: Socket dialer, defaults to the WebSocket implementation.
        knowledge_store: Knowledge-store client, defaults to HTTP.
        timer: Timer for connect deadlines and command windows.

    Returns:
        Fully wired dependency container.
    """
    config = config or load_config(config_path)
    terminal = config.terminal
    timer = timer or AsyncioTimer()

    session_state = SessionState(
        buffer=OutputBuffer(
            max_chars=terminal.max_buffer_chars,
            truncate_to=terminal.truncate_to_chars,
        )
    )

    connection_manager = ConnectionManager(
        state=session_state,
        dialer=dialer or WebSocketDialer(),
        base_url=terminal.url,
        default_path=terminal.default_project,
        mode=terminal.mode,
        connect_timeout=terminal.connect_timeout_ms / 1000,
        timer=timer,
    )

    dispatcher = CommandDispatcher(
        state=session_state,
        connection_manager=connection_manager,
        default_wait_ms=terminal.default_wait_ms,
        timer=timer,
    )

    knowledge_store = knowledge_store or create_knowledge_store(config)

    tool_router = ToolRouter(
        state=session_state,
        connection_manager=connection_manager,
        dispatcher=dispatcher,
        knowledge_store=knowledge_store,
        default_project=terminal.default_project,
    )

    return Container(
        config=config,
        session_state=session_state,
        connection_manager=connection_manager,
        dispatcher=dispatcher,
        tool_router=tool_router,
        knowledge_store=knowledge_store,
    )
