"""
Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database, fake upstreams for the
completion and email APIs (``httpx.MockTransport``), a temporary object
store, and an ``AsyncClient`` bound to the app with those dependencies
overridden.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import AsyncGenerator, Callable, Dict, List

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.pool import StaticPool

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeUpstream:
    """Stands in for a third-party HTTP API; records requests, answers via ``responder``."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def json_bodies(self) -> List[Dict]:
        return [json.loads(request.content) for request in self.requests]


@dataclass
class Account:
    email: str
    password: str
    user_id: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def build_sse_body(*fragments: str, done: bool = True) -> bytes:
    events = [f"data: {json.dumps({'choices': [{'delta': {'content': f}}]})}\n\n" for f in fragments]
    if done:
        events.append("data: [DONE]\n\n")
    return "".join(events).encode("utf-8")


@pytest.fixture
def sse_body():
    """Builder for upstream completion streams."""
    return build_sse_body


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    import mindful_heaven.core.database.entities  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:  # type: ignore[attr-defined]
        yield session


@pytest.fixture
def completion_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def completion_relay(completion_upstream):
    from mindful_heaven.server.services.completion_relay import CompletionRelay

    return CompletionRelay(
        api_key="test-openai-key",
        model="gpt-test",
        base_url="http://mock-openai/v1",
        transport=completion_upstream.transport,
    )


@pytest.fixture
def email_upstream() -> FakeUpstream:
    upstream = FakeUpstream()
    upstream.responder = lambda request: httpx.Response(200, json={"id": "email-1"})
    return upstream


@pytest.fixture
def email_service(email_upstream):
    from mindful_heaven.server.services.email_delivery import EmailService

    return EmailService(
        api_key="re_test",
        from_address="Mindful Heaven <onboarding@resend.dev>",
        base_url="http://mock-resend",
        transport=email_upstream.transport,
    )


@pytest.fixture
def object_storage(tmp_path):
    from mindful_heaven.server.services.object_storage import ObjectStorage

    return ObjectStorage(root_dir=tmp_path / "storage", public_base_url="http://localhost")


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, completion_relay, email_service, object_storage
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from mindful_heaven.core.database import get_session
    from mindful_heaven.server.main import app
    from mindful_heaven.server.services.completion_relay import get_completion_relay
    from mindful_heaven.server.services.email_delivery import get_email_service
    from mindful_heaven.server.services.object_storage import get_object_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_completion_relay] = lambda: completion_relay
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_object_storage] = lambda: object_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient):
    """Sign up an account through the API and return its credentials."""

    async def _register(email: str = "user@example.com", password: str = "secret123") -> Account:
        response = await client.post("/api/v1/auth/signup", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        body = response.json()
        return Account(email=email.strip().lower(), password=password, user_id=body["user_id"], token=body["access_token"])

    return _register
