"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - repository: in-memory thread repository
    - store: thread store seeded with one empty thread
    - scripted_transport: model transport yielding canned deltas
    - png_bytes: bytes that look like a PNG upload
    - async_client: HTTPX client for API testing, with the model transport
      replaced by scripted_transport

The model service is never contacted; every test runs offline.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from gemini_chat.agent.transport import get_transport
from gemini_chat.api import app
from gemini_chat.store import ThreadStore
from tests.fakes import InMemoryRepository, ScriptedTransport

# PNG signature followed by filler; never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture
def repository() -> InMemoryRepository:
    """Return an empty in-memory repository."""
    return InMemoryRepository()


@pytest.fixture
def store(repository: InMemoryRepository) -> ThreadStore:
    """Return a store seeded with one empty, active thread."""
    return ThreadStore(repository)


@pytest.fixture
def scripted_transport() -> ScriptedTransport:
    """Return a transport that streams a short canned reply."""
    return ScriptedTransport(["Hello", ", ", "world!"])


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
async def async_client(scripted_transport: ScriptedTransport) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient whose /chat/stream uses scripted_transport.
    """
    app.dependency_overrides[get_transport] = lambda: scripted_transport
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_transport, None)
