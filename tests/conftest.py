"""
Shared pytest fixtures.

- ``engine`` / ``db_session``: in-memory SQLite initialised with ``init_db``
- ``settings``: Settings with test credentials and no .env influence
- ``make_http_client``: httpx client over a MockTransport that records requests
- ``make_client``: TestClient over ``create_app`` with the above injected
"""

import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Callable, List, Optional

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from config.settings import Settings
from utils.database import create_db_engine, init_db
from tests.helpers import FakeLLM

TEST_APP_URL = "http://testserver"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        APP_URL=TEST_APP_URL,
        NOTION_CLIENT_ID="notion-client-id",
        NOTION_CLIENT_SECRET="notion-client-secret",
        NOTION_INTERNAL_SECRET=None,
        GITHUB_CLIENT_ID="github-client-id",
        GITHUB_CLIENT_SECRET="github-client-secret",
        LINKEDIN_CLIENT_ID="MOCK_ID",
        LANGFUSE_ENABLED=False,
    )


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


class RecordingTransport:
    """MockTransport handler wrapper that keeps every request it saw."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def _unexpected_request(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"Unexpected HTTP call: {request.method} {request.url}")


@pytest.fixture
def make_http_client():
    """
    Factory: ``client, recorder = make_http_client(handler)``.

    Without a handler every request fails the test.
    """
    clients = []

    def _make(handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        recorder = RecordingTransport(handler or _unexpected_request)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def make_client(settings, make_http_client):
    """
    Factory: ``client, recorder = make_client(handler=..., llm=..., **settings_overrides)``.

    The app runs its lifespan, so every client gets a fresh in-memory database.
    """
    stack = ExitStack()

    def _make(handler=None, llm=None, **overrides):
        app_settings = settings.model_copy(update=overrides) if overrides else settings
        http_client, recorder = make_http_client(handler)

        from api.main import create_app

        app = create_app(app_settings, http_client=http_client, llm=llm or FakeLLM())
        client = stack.enter_context(TestClient(app))
        return client, recorder

    yield _make

    stack.close()
