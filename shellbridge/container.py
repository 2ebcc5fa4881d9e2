"""Dependency container - holds all wired dependencies."""

from dataclasses import dataclass

from shellbridge.application.services import (
    CommandDispatcher,
    ConnectionManager,
    ToolRouter,
)
from shellbridge.config import Config
from shellbridge.domain import KnowledgeStore, SessionState


@dataclass(frozen=True)
class Container:
    """Immutable dependency container.

    All dependencies are wired at startup and cannot be modified.
    The session state inside is the single terminal session of the
    process.
    """

    config: Config

    # State
    session_state: SessionState

    # Services
    connection_manager: ConnectionManager
    dispatcher: CommandDispatcher
    tool_router: ToolRouter

    # Collaborators
    knowledge_store: KnowledgeStore
