"""API infrastructure - knowledge-store HTTP client."""

from .knowledge_client import KnowledgeStoreClient

__all__ = [
    "KnowledgeStoreClient",
]
