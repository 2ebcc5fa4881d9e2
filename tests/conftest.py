"""Shared test fixtures and configuration."""

import asyncio
from typing import Any

import pytest

from shellbridge.application.services import CommandDispatcher, ConnectionManager, ToolRouter
from shellbridge.domain import ConnectError, OutputBuffer, SessionState, WriteFailure

BASE_URL = "ws://terminal.test/ws"
DEFAULT_PROJECT = "/srv/project"


async def settle(rounds: int = 20) -> None:
    """Let pending tasks run until they block again."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# ============= Timer =============


class FakeTimer:
    """Timer whose sleeps only end when the test advances time."""

    def __init__(self, start_time: float = 0.0):
        self._time = start_time
        self._sleepers: list[tuple[float, asyncio.Future]] = []

    def now(self) -> float:
        return self._time

    async def sleep(self, seconds: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._sleepers.append((self._time + seconds, future))
        await future

    @property
    def pending(self) -> int:
        """Number of sleeps still waiting."""
        return sum(1 for _, future in self._sleepers if not future.done())

    async def advance(self, seconds: float) -> None:
        """Move time forward, wake due sleepers and let them run."""
        self._time += seconds
        remaining = []
        for deadline, future in self._sleepers:
            if future.done():
                continue
            if deadline <= self._time:
                future.set_result(None)
            else:
                remaining.append((deadline, future))
        self._sleepers = remaining
        await settle()


@pytest.fixture
def fake_timer():
    """Fake timer starting at 0."""
    return FakeTimer()


# ============= Socket =============


class FakeSocket:
    """In-memory terminal socket."""

    def __init__(self, on_message, on_close):
        self._on_message = on_message
        self._on_close = on_close
        self.sent: list[str] = []
        self.closed = False
        self.fail_writes = False

    async def send_text(self, data: str) -> None:
        if self.closed or self.fail_writes:
            raise WriteFailure("socket is closed")
        self.sent.append(data)

    async def close(self) -> None:
        self.closed = True

    # Test helpers
    def emit(self, message: str | bytes) -> None:
        """Simulate the server sending a frame."""
        self._on_message(message)

    def drop(self) -> None:
        """Simulate the server closing the socket."""
        self.closed = True
        self._on_close()


class FakeDialer:
    """Dialer that hands out FakeSockets.

    Set ``gate`` to an asyncio.Event to hold dials open until it is
    set, or ``error`` to make dials fail.
    """

    def __init__(self):
        self.urls: list[str] = []
        self.sockets: list[FakeSocket] = []
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None

    async def __call__(self, url, on_message, on_close) -> FakeSocket:
        self.urls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        socket = FakeSocket(on_message, on_close)
        self.sockets.append(socket)
        return socket

    @property
    def attempts(self) -> int:
        return len(self.urls)

    @property
    def last_socket(self) -> FakeSocket:
        return self.sockets[-1]


def refusing_dialer(reason: str = "connection refused") -> FakeDialer:
    dialer = FakeDialer()
    dialer.error = ConnectError(BASE_URL, reason)
    return dialer


@pytest.fixture
def fake_dialer():
    """Dialer that opens immediately."""
    return FakeDialer()


# ============= Knowledge store =============


class FakeKnowledgeStore:
    """Records calls and returns canned responses.

    Set ``gate`` to an asyncio.Event to hold requests open until it is set.
    """

    def __init__(self):
        self.calls: list[tuple[str, Any]] = []
        self.responses: dict[str, Any] = {}
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def _respond(self, name: str, payload: Any) -> Any:
        self.calls.append((name, payload))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.responses.get(name, {"ok": True})

    async def get_context(self, project):
        return await self._respond("get_context", project)

    async def get_todos(self, project, status="pending"):
        return await self._respond("get_todos", (project, status))

    async def search_knowledge(self, query, category=None):
        return await self._respond("search_knowledge", (query, category))

    async def log_session(self, payload):
        return await self._respond("log_session", payload)

    async def add_knowledge(self, payload):
        return await self._respond("add_knowledge", payload)

    async def get_ports(self):
        return await self._respond("get_ports", None)


@pytest.fixture
def knowledge_store():
    """Fake knowledge store."""
    return FakeKnowledgeStore()


# ============= Session Fixtures =============


@pytest.fixture
def session_state():
    """Session with a small buffer for truncation tests."""
    return SessionState(buffer=OutputBuffer(max_chars=100, truncate_to=60))


@pytest.fixture
def connection_manager(session_state, fake_dialer, fake_timer):
    """Connection manager wired to fakes."""
    return ConnectionManager(
        state=session_state,
        dialer=fake_dialer,
        base_url=BASE_URL,
        default_path=DEFAULT_PROJECT,
        timer=fake_timer,
    )


@pytest.fixture
def dispatcher(session_state, connection_manager, fake_timer):
    """Command dispatcher wired to fakes."""
    return CommandDispatcher(
        state=session_state,
        connection_manager=connection_manager,
        timer=fake_timer,
    )


@pytest.fixture
def tool_router(session_state, connection_manager, dispatcher, knowledge_store):
    """Tool router with terminal and knowledge tools."""
    return ToolRouter(
        state=session_state,
        connection_manager=connection_manager,
        dispatcher=dispatcher,
        knowledge_store=knowledge_store,
        default_project=DEFAULT_PROJECT,
    )
