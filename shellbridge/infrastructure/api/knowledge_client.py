"""Knowledge-store HTTP client."""

import logging
from typing import Any

import httpx

from shellbridge.domain import KnowledgeStoreError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class KnowledgeStoreClient:
    """JSON client for the knowledge-store REST API.

    Any non-2xx status or transport failure raises KnowledgeStoreError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        ) as client:
            try:
                response = await client.request(method, endpoint, params=params, json=body)
            except httpx.HTTPError as e:
                logger.error("Knowledge store unreachable endpoint=%s: %s", endpoint, e)
                raise KnowledgeStoreError(f"Knowledge store request failed: {e}") from e

        if not response.is_success:
            logger.error(
                "Knowledge store error endpoint=%s status=%d", endpoint, response.status_code
            )
            raise KnowledgeStoreError(
                f"Knowledge store returned {response.status_code}: {response.reason_phrase}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise KnowledgeStoreError(f"Knowledge store returned invalid JSON: {e}") from e

    async def get_context(self, project: str) -> dict[str, Any]:
        return await self._request("GET", "/api/context", params={"project": project})

    async def get_todos(self, project: str, status: str = "pending") -> Any:
        return await self._request(
            "GET", "/api/todos", params={"project": project, "status": status}
        )

    async def search_knowledge(self, query: str, category: str | None = None) -> Any:
        params = {"q": query}
        if category:
            params["category"] = category
        return await self._request("GET", "/api/knowledge/search", params=params)

    async def log_session(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/api/sessions", body=payload)

    async def add_knowledge(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/api/knowledge", body=payload)

    async def get_ports(self) -> Any:
        return await self._request("GET", "/api/ports")
