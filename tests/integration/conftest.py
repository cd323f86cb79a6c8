"""Pytest fixtures for integration tests.

Provides an in-memory SQLite database, a seeded ``ReviewEngine`` and an
HTTP client bound to the FastAPI app. Production runs on PostgreSQL;
the engine only relies on features both dialects share (ON CONFLICT
upserts, guarded UPDATE/DELETE row counts). Row locks are a no-op on
SQLite, so tests never run writers concurrently.
"""

from __future__ import annotations

import random
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from reviewpool.config import AuthConfig, ReviewpoolConfig
from reviewpool.database.connection import create_schema, get_session_factory
from reviewpool.engine import ReviewEngine, TeamMember
from reviewpool.web.app import create_app

ADMIN_TOKEN = "admin-secret"
USER_TOKEN = "user-secret"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite async engine with the schema applied.

    Yields:
        AsyncEngine sharing one connection so every session sees the same data.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling query functions directly; rolled back afterwards."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest_asyncio.fixture
async def review_engine(
    session_factory: async_sessionmaker[AsyncSession],
    rng: random.Random,
) -> ReviewEngine:
    return ReviewEngine(session_factory, rng=rng)


def members(*rows: tuple[Any, ...]) -> list[TeamMember]:
    """Build TeamMember lists from ``(user_id, username[, is_active])`` tuples."""
    return [
        TeamMember(user_id=entry[0], username=entry[1], is_active=entry[2] if len(entry) > 2 else True)
        for entry in rows
    ]


@pytest.fixture
def make_members() -> Any:
    return members


@pytest_asyncio.fixture
async def backend_team(review_engine: ReviewEngine) -> Any:
    """A four-person team: alice, bob, carol, dave (all active)."""
    return await review_engine.create_team(
        "backend",
        members(("u1", "alice"), ("u2", "bob"), ("u3", "carol"), ("u4", "dave")),
    )


@pytest.fixture
def test_config() -> ReviewpoolConfig:
    return ReviewpoolConfig(auth=AuthConfig(admin_token=ADMIN_TOKEN, user_token=USER_TOKEN))


@pytest_asyncio.fixture
async def async_client(
    test_config: ReviewpoolConfig,
    session_factory: async_sessionmaker[AsyncSession],
    review_engine: ReviewEngine,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the FastAPI app backed by the test database.

    ASGITransport does not run the lifespan, so the state it would set up
    is assigned directly.
    """
    app = create_app(test_config)
    app.state.session_factory = session_factory
    app.state.review_engine = review_engine

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}
