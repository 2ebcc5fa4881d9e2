"""Tests for ToolRouter."""

import asyncio
import json

from shellbridge.application.services import ConnectionManager, ToolRouter
from shellbridge.application.services.tool_router import EMPTY_BUFFER, NO_OUTPUT
from shellbridge.domain import KnowledgeStoreError

from ..conftest import BASE_URL, DEFAULT_PROJECT, FakeDialer, settle


class TestToolListing:
    """Tests for list_tools()."""

    def test_terminal_and_knowledge_tools(self, tool_router):
        """Test all tools are listed with object schemas."""
        names = [tool.name for tool in tool_router.list_tools()]
        assert names[:4] == ["connect", "send", "output", "status"]
        assert {"get_briefing", "get_todos", "search_knowledge"} <= set(names)
        assert {"log_session", "add_knowledge", "get_ports"} <= set(names)
        for tool in tool_router.list_tools():
            assert tool.input_schema["type"] == "object"

    def test_send_requires_command(self, tool_router):
        """Test the send schema marks command as required."""
        send = next(t for t in tool_router.list_tools() if t.name == "send")
        assert send.input_schema["required"] == ["command"]

    def test_terminal_only_without_knowledge_store(self, session_state, connection_manager, dispatcher):
        """Test knowledge tools are hidden when no store is configured."""
        router = ToolRouter(session_state, connection_manager, dispatcher)
        assert [t.name for t in router.list_tools()] == ["connect", "send", "output", "status"]


class TestTerminalTools:
    """Tests for connect, send, output and status."""

    async def test_connect(self, tool_router, fake_dialer):
        """Test connect confirms endpoint and target."""
        result = await tool_router.call("connect", {"project": "/app"})

        assert not result.is_error
        assert result.text == f"Connected to {BASE_URL} (target: /app)"
        assert fake_dialer.attempts == 1

    async def test_connect_default_project(self, tool_router):
        """Test connect without project uses the default."""
        result = await tool_router.call("connect", {})
        assert DEFAULT_PROJECT in result.text

    async def test_send_no_output_sentinel(self, tool_router, fake_timer):
        """Test an empty window returns the sentinel."""
        task = asyncio.create_task(tool_router.call("send", {"command": "true", "waitMs": 20}))
        await settle()
        await fake_timer.advance(0.02)

        result = await task
        assert not result.is_error
        assert result.text == NO_OUTPUT == "(no output yet)"

    async def test_end_to_end(self, tool_router, fake_dialer, fake_timer):
        """Test connect, send with server output, then read output."""
        await tool_router.call("connect", {})

        task = asyncio.create_task(tool_router.call("send", {"command": "ls", "waitMs": 50}))
        await settle()
        fake_dialer.last_socket.emit('{"type":"output","data":"\\u001b[2Kfile.txt\\n"}')
        await fake_timer.advance(0.05)

        assert (await task).text == "file.txt\n"
        output = await tool_router.call("output", {})
        assert output.text == "file.txt\n"

    async def test_output_lines(self, tool_router, session_state):
        """Test output returns only trailing lines when asked."""
        session_state.buffer.append("a\nb\nc\nd")

        result = await tool_router.call("output", {"lines": 2})

        assert result.text == "c\nd"

    async def test_output_alias(self, tool_router, session_state):
        """Test get-output is accepted as an alias."""
        session_state.buffer.append("x")
        assert (await tool_router.call("get-output", {})).text == "x"

    async def test_output_empty(self, tool_router):
        """Test an empty buffer reads as the empty marker."""
        result = await tool_router.call("output")
        assert result.text == EMPTY_BUFFER == "(empty)"

    async def test_status_disconnected(self, tool_router):
        """Test status before connecting."""
        status = json.loads((await tool_router.call("status")).text)

        assert status == {
            "connected": False,
            "wsUrl": f"{BASE_URL}?path=%2Fsrv%2Fproject&mode=mcp",
            "target": DEFAULT_PROJECT,
            "bufferSize": 0,
        }

    async def test_status_connected(self, tool_router, session_state):
        """Test status reflects connection and buffer size."""
        await tool_router.call("connect", {"project": "/app"})
        session_state.buffer.append("12345")

        status = json.loads((await tool_router.call("status")).text)

        assert status["connected"] is True
        assert status["target"] == "/app"
        assert status["bufferSize"] == 5


class TestErrorResults:
    """Tests for error conversion."""

    async def test_unknown_tool(self, tool_router):
        """Test unknown names produce an error result."""
        result = await tool_router.call("rm_rf", {})
        assert result.is_error
        assert result.text == "Error: Unknown tool: rm_rf"

    async def test_missing_command(self, tool_router):
        """Test send without command is rejected."""
        result = await tool_router.call("send", {})
        assert result.is_error
        assert "command" in result.text

    async def test_bad_wait_type(self, tool_router):
        """Test non-numeric waitMs is rejected."""
        result = await tool_router.call("send", {"command": "ls", "waitMs": "soon"})
        assert result.is_error
        assert "waitMs" in result.text

    async def test_connect_timeout_becomes_error(self, session_state, dispatcher, fake_timer):
        """Test a connect timeout is reported, not raised."""
        dialer = FakeDialer()
        dialer.gate = asyncio.Event()
        manager = ConnectionManager(
            state=session_state,
            dialer=dialer,
            base_url=BASE_URL,
            default_path=DEFAULT_PROJECT,
            timer=fake_timer,
        )
        router = ToolRouter(session_state, manager, dispatcher)

        task = asyncio.create_task(router.call("connect", {}))
        await settle()
        await fake_timer.advance(10.0)

        result = await task
        assert result.is_error
        assert "timed out" in result.text

    async def test_write_failure_becomes_error(self, tool_router, fake_dialer):
        """Test write failures are reported as error results."""
        await tool_router.call("connect", {})
        fake_dialer.last_socket.fail_writes = True

        result = await tool_router.call("send", {"command": "ls", "waitMs": 1})

        assert result.is_error
        assert result.text.startswith("Error:")

    async def test_unexpected_exception_becomes_error(self, tool_router, knowledge_store):
        """Test non-bridge exceptions are also contained."""
        knowledge_store.error = RuntimeError("boom")

        result = await tool_router.call("get_ports")

        assert result.is_error
        assert result.text == "Error: boom"


class TestKnowledgeTools:
    """Tests for knowledge-store tools."""

    async def test_get_briefing(self, tool_router, knowledge_store):
        """Test the briefing is formatted from the context response."""
        knowledge_store.responses["get_context"] = {
            "greeting": "Welcome back",
            "todos": [{"priority": "high", "title": "Fix", "description": "the bug"}],
        }

        result = await tool_router.call("get_briefing", {})

        assert knowledge_store.calls == [("get_context", DEFAULT_PROJECT)]
        assert "Welcome back" in result.text
        assert "- [high] Fix: the bug" in result.text

    async def test_get_todos_defaults(self, tool_router, knowledge_store):
        """Test todos default to pending for the default project."""
        knowledge_store.responses["get_todos"] = [{"title": "a"}]

        result = await tool_router.call("get_todos", {})

        assert knowledge_store.calls == [("get_todos", (DEFAULT_PROJECT, "pending"))]
        assert json.loads(result.text) == [{"title": "a"}]

    async def test_get_todos_invalid_status(self, tool_router, knowledge_store):
        """Test unknown status values are rejected before calling the API."""
        result = await tool_router.call("get_todos", {"status": "someday"})
        assert result.is_error
        assert knowledge_store.calls == []

    async def test_search_knowledge(self, tool_router, knowledge_store):
        """Test search passes query and category."""
        await tool_router.call("search_knowledge", {"query": "ports", "category": "config"})
        assert knowledge_store.calls == [("search_knowledge", ("ports", "config"))]

    async def test_search_requires_query(self, tool_router):
        """Test search without query is an error."""
        result = await tool_router.call("search_knowledge", {})
        assert result.is_error

    async def test_log_session(self, tool_router, knowledge_store):
        """Test session logging payload."""
        knowledge_store.responses["log_session"] = {"id": 7}
        messages = [{"role": "user", "content": "hi"}]

        result = await tool_router.call(
            "log_session", {"summary": "Did things", "messages": messages, "project": "/p"}
        )

        assert result.text == 'Session logged: {"id": 7}'
        assert knowledge_store.calls == [
            ("log_session", {"project": "/p", "summary": "Did things", "messages": messages})
        ]

    async def test_add_knowledge_requires_fields(self, tool_router, knowledge_store):
        """Test add_knowledge validates required fields."""
        result = await tool_router.call("add_knowledge", {"title": "t", "content": "c"})
        assert result.is_error
        assert "category" in result.text
        assert knowledge_store.calls == []

    async def test_add_knowledge(self, tool_router, knowledge_store):
        """Test add_knowledge payload."""
        result = await tool_router.call(
            "add_knowledge", {"title": "t", "content": "c", "category": "config"}
        )

        assert result.text.startswith("Knowledge added: ")
        assert knowledge_store.calls[0][1] == {
            "project": DEFAULT_PROJECT,
            "title": "t",
            "content": "c",
            "category": "config",
        }

    async def test_get_ports(self, tool_router, knowledge_store):
        """Test port list formatting."""
        knowledge_store.responses["get_ports"] = [
            {"port": 5400, "service": "terminal", "description": "shell bridge"}
        ]

        result = await tool_router.call("get_ports")

        assert "- **:5400** - terminal: shell bridge" in result.text

    async def test_store_error_becomes_error(self, tool_router, knowledge_store):
        """Test API failures are reported as error results."""
        knowledge_store.error = KnowledgeStoreError("Knowledge store returned 500: Internal")

        result = await tool_router.call("get_briefing", {})

        assert result.is_error
        assert "500" in result.text
