"""Tests for GitHubStarsClient.

Tests cover:
- Cache hits (single report, no network)
- Cache misses (paginated download, write-back)
- Caching strategy selection and the persisted toggle
- Building the full stack from settings
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from github_stars.cache import NullCache
from github_stars.config import CacheConfig
from github_stars.github import GitHubStarsClient, ProgressReport
from github_stars.github.exceptions import GitHubNotFoundError, PaginationAbortedError
from github_stars.preferences import MemoryPreferenceStore
from tests.fixtures import error, make_repos, make_users, ok

STARGAZERS = "repos/tiangolo/typer/stargazers"
STARRED = "users/alice/starred"

Records = list[dict[str, Any]]


class MemoryCache:
    """Dict-backed CollectionCache."""

    def __init__(self, supported: bool = True) -> None:
        self.is_supported = supported
        self.followers: dict[str, Records] = {}
        self.starred: dict[str, Records] = {}

    async def get_followers(self, repo_name: str) -> Records | None:
        return self.followers.get(repo_name)

    async def save_followers(self, repo_name: str, followers: Records) -> None:
        self.followers[repo_name] = followers

    async def get_starred(self, user_name: str) -> Records | None:
        return self.starred.get(user_name)

    async def save_starred(self, user_name: str, starred: Records) -> None:
        self.starred[user_name] = starred


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def preferences() -> MemoryPreferenceStore:
    return MemoryPreferenceStore()


@pytest.fixture
def client(requester, cache, preferences) -> GitHubStarsClient:
    return GitHubStarsClient(requester, cache=cache, preferences=preferences)


class TestCacheHit:
    async def test_single_report_and_no_requests(self, client, cache, transport) -> None:
        cache.starred["alice"] = make_repos(250)
        reports: list[ProgressReport] = []

        records = await client.get_starred_projects("alice").on_progress(reports.append)

        assert records == make_repos(250)
        assert transport.calls == []
        assert reports == [
            ProgressReport(next_page=0, total_pages=0, per_page=250, data=make_repos(250))
        ]

    async def test_stargazers_hit(self, client, cache, transport) -> None:
        cache.followers["tiangolo/typer"] = make_users(3)

        records = await client.get_stargazers("tiangolo/typer")

        assert records == make_users(3)
        assert transport.calls == []

    async def test_resolves_on_later_loop_turn(self, client, cache) -> None:
        cache.starred["alice"] = make_repos(1)

        handle = client.get_starred_projects("alice")

        assert not handle.done()
        await handle

    async def test_lookup_failure_falls_back_to_github(self, requester, transport) -> None:
        cache = MemoryCache()
        cache.get_starred = AsyncMock(side_effect=RuntimeError("disk gone"))  # type: ignore[method-assign]
        transport.add(STARRED, ok(make_repos(2)))
        client = GitHubStarsClient(requester, cache=cache)

        assert await client.get_starred_projects("alice") == make_repos(2)


class TestCacheMiss:
    async def test_downloads_and_saves(self, client, cache, transport) -> None:
        transport.add_pages(STARRED, [make_repos(100), make_repos(100, 100), make_repos(37, 200)])
        reports: list[ProgressReport] = []

        records = await client.get_starred_projects("alice").on_progress(reports.append)

        assert len(records) == 237
        assert len(reports) == 3
        assert len(transport.calls) == 3
        assert cache.starred["alice"] == records

    async def test_stargazers_handler(self, client, cache, transport) -> None:
        transport.add(STARGAZERS, ok(make_users(5)))

        records = await client.get_stargazers("tiangolo/typer", fields=["login"])

        assert records == [{"login": f"user{i}"} for i in range(5)]
        assert transport.calls[0][0] == STARGAZERS
        assert cache.followers["tiangolo/typer"] == records

    async def test_second_fetch_served_from_cache(self, client, transport) -> None:
        transport.add(STARRED, ok(make_repos(4)))

        first = await client.get_starred_projects("alice")
        second = await client.get_starred_projects("alice")

        assert first == second
        assert len(transport.calls) == 1

    async def test_stop_signal_forwarded(self, client, cache, transport) -> None:
        transport.add_pages(STARRED, [make_repos(100)] * 20)

        handle = client.get_starred_projects("alice").on_progress(lambda r: r.total_pages > 5)

        with pytest.raises(PaginationAbortedError):
            await handle
        assert transport.pages_requested() == [1]
        assert "alice" not in cache.starred

    async def test_failure_not_cached(self, client, cache, transport) -> None:
        transport.add("users/ghost/starred", error(404))

        with pytest.raises(GitHubNotFoundError):
            await client.get_starred_projects("ghost")
        assert cache.starred == {}

    async def test_save_failure_still_resolves(self, requester, transport) -> None:
        cache = MemoryCache()
        cache.save_starred = AsyncMock(side_effect=RuntimeError("read-only"))  # type: ignore[method-assign]
        transport.add(STARRED, ok(make_repos(2)))
        client = GitHubStarsClient(requester, cache=cache)

        assert await client.get_starred_projects("alice") == make_repos(2)


class TestCachingStrategy:
    async def test_disabled_caching_always_downloads(self, requester, cache, transport) -> None:
        cache.starred["alice"] = make_repos(1)
        transport.add(STARRED, ok(make_repos(3)))
        client = GitHubStarsClient(requester, cache=cache, cache_enabled=False)

        records = await client.get_starred_projects("alice")

        assert len(records) == 3
        assert cache.starred["alice"] == make_repos(1)
        assert client.cache_enabled is False

    async def test_unsupported_cache_never_used(self, requester, transport) -> None:
        cache = MemoryCache(supported=False)
        cache.starred["alice"] = make_repos(1)
        transport.add(STARRED, ok(make_repos(3)))
        client = GitHubStarsClient(requester, cache=cache)

        assert len(await client.get_starred_projects("alice")) == 3
        assert client.cache_supported is False
        assert client.cache_enabled is False

    def test_no_cache_given(self, requester) -> None:
        client = GitHubStarsClient(requester)
        assert client.cache_supported is False

    async def test_set_caching_persists_and_switches(
        self, client, cache, preferences, transport
    ) -> None:
        cache.starred["alice"] = make_repos(1)
        transport.add(STARRED, ok(make_repos(3)))

        await client.set_caching(False)

        assert await preferences.get_cache_enabled() is False
        assert client.cache_enabled is False
        assert len(await client.get_starred_projects("alice")) == 3

        await client.set_caching(True)

        assert await preferences.get_cache_enabled() is True
        assert await client.get_starred_projects("alice") == make_repos(1)
        assert len(transport.calls) == 1

    def test_rate_monitor_is_requesters(self, client, requester) -> None:
        assert client.rate_monitor is requester.monitor


class TestCreate:
    async def test_memory_stack_without_persistence(self, settings, transport) -> None:
        settings.cache = CacheConfig(persistent=False)
        transport.add(STARRED, ok(make_repos(2)))

        async with await GitHubStarsClient.create(settings, transport=transport) as client:
            assert client.cache_supported is False
            assert isinstance(client._cache, NullCache)
            assert await client.get_starred_projects("alice") == make_repos(2)

        assert transport.closed is True

    async def test_database_stack(self, settings, transport, tmp_path) -> None:
        settings.database_url = f"sqlite+aiosqlite:///{tmp_path / 'stars.db'}"
        transport.add(STARRED, ok(make_repos(2)))

        async with await GitHubStarsClient.create(settings, transport=transport) as client:
            assert client.cache_supported is True
            assert client.cache_enabled is True
            await client.get_starred_projects("alice")
            assert await client.backing_cache.count() == 1

        async with await GitHubStarsClient.create(settings, transport=transport) as client:
            assert await client.get_starred_projects("alice") == make_repos(2)

        assert len(transport.calls) == 1

    async def test_persisted_toggle_survives_restart(self, settings, transport, tmp_path) -> None:
        settings.database_url = f"sqlite+aiosqlite:///{tmp_path / 'stars.db'}"

        async with await GitHubStarsClient.create(settings, transport=transport) as client:
            await client.set_caching(False)

        async with await GitHubStarsClient.create(settings, transport=transport) as client:
            assert client.cache_supported is True
            assert client.cache_enabled is False

    async def test_stored_token_preferred(self, settings, tmp_path, monkeypatch) -> None:
        from github_stars.db import create_tables, make_engine, make_session_factory
        from github_stars.preferences import SqlPreferenceStore

        settings.database_url = f"sqlite+aiosqlite:///{tmp_path / 'stars.db'}"
        settings.github_token = "env-token"
        engine = make_engine(settings.database_url)
        await create_tables(engine)
        await SqlPreferenceStore(make_session_factory(engine)).set_access_token("stored-token")
        await engine.dispose()

        captured: list[str | None] = []

        class RecordingTransport:
            def __init__(self, token, *, base_url=None) -> None:
                captured.append(token)

            async def aclose(self) -> None:
                pass

        monkeypatch.setattr("github_stars.github.client.GitHubKitTransport", RecordingTransport)

        async with await GitHubStarsClient.create(settings):
            pass

        assert captured == ["stored-token"]

    async def test_env_token_fallback(self, settings, monkeypatch) -> None:
        settings.cache = CacheConfig(persistent=False)
        settings.github_token = "env-token"
        captured: list[str | None] = []

        class RecordingTransport:
            def __init__(self, token, *, base_url=None) -> None:
                captured.append(token)

            async def aclose(self) -> None:
                pass

        monkeypatch.setattr("github_stars.github.client.GitHubKitTransport", RecordingTransport)

        async with await GitHubStarsClient.create(settings):
            pass

        assert captured == ["env-token"]
