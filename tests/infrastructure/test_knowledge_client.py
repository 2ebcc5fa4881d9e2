"""Tests for KnowledgeStoreClient."""

import json

import httpx
import pytest

from shellbridge.domain import KnowledgeStoreError
from shellbridge.infrastructure.api import KnowledgeStoreClient

BASE = "http://knowledge.test"


class RecordingHandler:
    """httpx mock handler that records requests."""

    def __init__(self, response: httpx.Response | None = None):
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={"ok": True})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def client(handler):
    return KnowledgeStoreClient(BASE + "/", transport=httpx.MockTransport(handler))


class TestEndpoints:
    """Tests for request shapes."""

    async def test_get_context(self, client, handler):
        assert await client.get_context("/app") == {"ok": True}
        assert handler.last.method == "GET"
        assert handler.last.url.path == "/api/context"
        assert handler.last.url.params["project"] == "/app"

    async def test_get_todos(self, client, handler):
        await client.get_todos("/app", "all")
        assert handler.last.url.path == "/api/todos"
        assert dict(handler.last.url.params) == {"project": "/app", "status": "all"}

    async def test_search_without_category(self, client, handler):
        """Test category is omitted when not given."""
        await client.search_knowledge("ports")
        assert handler.last.url.path == "/api/knowledge/search"
        assert dict(handler.last.url.params) == {"q": "ports"}

    async def test_search_with_category(self, client, handler):
        await client.search_knowledge("ports", "config")
        assert handler.last.url.params["category"] == "config"

    async def test_log_session_posts_json(self, client, handler):
        """Test session payloads are posted as JSON."""
        payload = {"project": "/app", "summary": "s", "messages": []}

        await client.log_session(payload)

        assert handler.last.method == "POST"
        assert handler.last.url.path == "/api/sessions"
        assert json.loads(handler.last.content) == payload

    async def test_add_knowledge(self, client, handler):
        await client.add_knowledge({"title": "t"})
        assert handler.last.method == "POST"
        assert handler.last.url.path == "/api/knowledge"

    async def test_get_ports(self, client, handler):
        handler.response = httpx.Response(200, json=[{"port": 80}])
        assert await client.get_ports() == [{"port": 80}]
        assert handler.last.url.path == "/api/ports"

    def test_base_url_trailing_slash(self, client):
        assert client.base_url == BASE


class TestErrors:
    """Tests for error mapping."""

    async def test_error_status(self, client, handler):
        """Test non-2xx statuses raise with code and reason."""
        handler.response = httpx.Response(503)

        with pytest.raises(KnowledgeStoreError, match="503: Service Unavailable"):
            await client.get_ports()

    async def test_transport_error(self):
        """Test network failures raise KnowledgeStoreError."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = KnowledgeStoreClient(BASE, transport=httpx.MockTransport(refuse))

        with pytest.raises(KnowledgeStoreError, match="request failed"):
            await client.get_context("/app")

    async def test_invalid_json(self, client, handler):
        handler.response = httpx.Response(200, text="<html>")

        with pytest.raises(KnowledgeStoreError, match="invalid JSON"):
            await client.get_ports()
