"""Knowledge store port - interface to the session/knowledge API."""

from typing import Any, Protocol


class KnowledgeStore(Protocol):
    """Protocol for the knowledge-store API.

    Every method raises KnowledgeStoreError on a non-2xx response or
    transport failure.
    """

    async def get_context(self, project: str) -> dict[str, Any]: ...

    async def get_todos(self, project: str, status: str = "pending") -> Any: ...

    async def search_knowledge(self, query: str, category: str | None = None) -> Any: ...

    async def log_session(self, payload: dict[str, Any]) -> Any: ...

    async def add_knowledge(self, payload: dict[str, Any]) -> Any: ...

    async def get_ports(self) -> Any: ...
