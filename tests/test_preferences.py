"""Tests for persistent and in-memory preference stores."""

import pytest

from github_stars.preferences import MemoryPreferenceStore, SqlPreferenceStore


class TestSqlPreferenceStore:
    async def test_token_unset(self, session_factory):
        assert await SqlPreferenceStore(session_factory).get_access_token() is None

    async def test_token_round_trip(self, session_factory):
        store = SqlPreferenceStore(session_factory)

        await store.set_access_token("ghp_secret")

        assert await store.get_access_token() == "ghp_secret"

    @pytest.mark.parametrize("cleared", [None, ""])
    async def test_clearing_token(self, session_factory, cleared):
        store = SqlPreferenceStore(session_factory)
        await store.set_access_token("ghp_secret")

        await store.set_access_token(cleared)

        assert await store.get_access_token() is None

    async def test_cache_enabled_defaults_true(self, session_factory):
        assert await SqlPreferenceStore(session_factory).get_cache_enabled() is True

    async def test_cache_enabled_custom_default(self, session_factory):
        store = SqlPreferenceStore(session_factory, cache_enabled_default=False)
        assert await store.get_cache_enabled() is False

    async def test_cache_toggle_persists(self, session_factory):
        await SqlPreferenceStore(session_factory).set_cache_enabled(False)

        # A fresh store reads the same table
        assert await SqlPreferenceStore(session_factory).get_cache_enabled() is False

        await SqlPreferenceStore(session_factory).set_cache_enabled(True)
        assert await SqlPreferenceStore(session_factory).get_cache_enabled() is True


class TestMemoryPreferenceStore:
    async def test_defaults(self):
        store = MemoryPreferenceStore()
        assert await store.get_access_token() is None
        assert await store.get_cache_enabled() is True

    async def test_set_values(self):
        store = MemoryPreferenceStore()

        await store.set_access_token("ghp_x")
        await store.set_cache_enabled(False)

        assert await store.get_access_token() == "ghp_x"
        assert await store.get_cache_enabled() is False

    async def test_empty_token_clears(self):
        store = MemoryPreferenceStore(access_token="ghp_x")
        await store.set_access_token("")
        assert await store.get_access_token() is None
