"""Pytest configuration and shared fixtures.

Usage Guide:
- For GitHub API tests: use the ``transport`` fixture (a FakeTransport) and
  the response builders in tests.fixtures
- For cache/preference tests: use ``session_factory`` (in-memory SQLite)
- For backoff tests: use ``recorded_sleep`` to capture waits without sleeping
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from github_stars.config import BackoffConfig, PaginationConfig, RateLimitConfig, Settings
from github_stars.db.models import Base
from github_stars.github.backoff import BackoffPolicy
from github_stars.github.rate_limit import RateLimitMonitor
from github_stars.github.requester import RateLimitedRequester
from tests.fixtures import FakeTransport


# -----------------------------------------------------------------------------
# Settings Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env, in-memory database)."""
    return Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")


# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
async def test_engine():
    """Create an in-memory SQLite engine for tests.

    Each test gets a fresh database with all tables created.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    """Create an async session with auto-rollback.

    Changes are rolled back after each test to ensure isolation.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


# -----------------------------------------------------------------------------
# GitHub Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def recorded_sleep() -> AsyncMock:
    """Stand-in for asyncio.sleep; inspect ``await_args_list`` for the waits."""
    return AsyncMock(return_value=None)


@pytest.fixture
def monitor() -> RateLimitMonitor:
    return RateLimitMonitor(RateLimitConfig())


@pytest.fixture
def requester(transport, monitor, recorded_sleep) -> RateLimitedRequester:
    """Requester over the fake transport with default backoff and no real sleeps."""
    return RateLimitedRequester(
        transport,
        monitor=monitor,
        backoff=BackoffPolicy.from_config(BackoffConfig()),
        sleep=recorded_sleep,
    )


@pytest.fixture
def pagination_config() -> PaginationConfig:
    return PaginationConfig()
