"""Tests for database engine and session management."""

import pytest
from sqlalchemy import text

from github_stars.db import create_tables, make_engine, make_session_factory, session_scope
from github_stars.db.models import Preference


class TestDatabaseEngine:
    """Tests for async SQLAlchemy engine operations."""

    async def test_create_tables(self, test_engine):
        """Test that all tables are created successfully."""
        async with test_engine.connect() as conn:
            result = await conn.execute(
                text("SELECT name FROM sqlite_master WHERE type='table'")
            )
            tables = {row[0] for row in result.fetchall()}

        assert "cached_collections" in tables
        assert "preferences" in tables

    async def test_create_tables_is_idempotent(self, tmp_path):
        engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'stars.db'}")
        try:
            await create_tables(engine)
            await create_tables(engine)
        finally:
            await engine.dispose()

    async def test_session_scope_commits(self, session_factory):
        """Changes made inside session_scope are visible to a new session."""
        async with session_scope(session_factory) as session:
            session.add(Preference(key="cache_enabled", value="false"))

        async with session_factory() as session:
            stored = await session.get(Preference, "cache_enabled")
            assert stored is not None
            assert stored.value == "false"

    async def test_session_scope_rolls_back_on_error(self, session_factory):
        """An exception inside session_scope discards the changes and propagates."""
        with pytest.raises(ValueError):
            async with session_scope(session_factory) as session:
                session.add(Preference(key="access_token", value="ghp_x"))
                await session.flush()
                raise ValueError("Simulated error")

        async with session_factory() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM preferences"))
            assert result.scalar() == 0

    def test_session_factory_keeps_objects_after_commit(self, test_engine):
        factory = make_session_factory(test_engine)
        assert factory.kw["expire_on_commit"] is False
