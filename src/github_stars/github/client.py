"""GitHub stars client: complete stargazer and starred-project collections.

Each collection is served from the cache when possible; otherwise every
page is downloaded through the Paginator and the result is written back
to the cache.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from github_stars.cache import CollectionCache, NullCache, Records, select_cache
from github_stars.config import Settings, get_settings
from github_stars.logging import bind_collection, get_logger

from .backoff import BackoffPolicy
from .pagination import FieldSpec, Paginator, ProgressFuture, ProgressReport
from .rate_limit import RateLimitMonitor
from .requester import RateLimitedRequester
from .transport import GitHubKitTransport, Transport

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from github_stars.preferences import PreferenceStore

logger = get_logger(__name__)


class GitHubStarsClient:
    """Fetches whole GitHub collections with progress reporting.

    Usage:
        async with await GitHubStarsClient.create() as client:
            handle = client.get_starred_projects("alice", fields=["full_name"])
            handle.on_progress(lambda r: print(f"{len(r.data)} more"))
            starred = await handle

    The caching strategy is chosen at construction: the backing cache is
    used only when it is supported and caching is enabled. ``set_caching``
    persists a new choice and swaps the strategy.
    """

    def __init__(
        self,
        requester: RateLimitedRequester,
        *,
        cache: CollectionCache | None = None,
        preferences: PreferenceStore | None = None,
        cache_enabled: bool = True,
        paginator: Paginator | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            requester: Rate limited request unit used for every page
            cache: Backing collection cache (no caching if omitted)
            preferences: Where the caching toggle is persisted
            cache_enabled: Persisted caching preference read at startup
            paginator: Custom paginator (built from requester if omitted)
            engine: Database engine owned by this client, disposed on close
        """
        self._requester = requester
        self._engine = engine
        self._paginator = paginator or Paginator(requester)
        self._backing_cache: CollectionCache = cache or NullCache()
        self._preferences = preferences
        self._cache = select_cache(self._backing_cache, cache_enabled)

    @classmethod
    async def create(
        cls,
        settings: Settings | None = None,
        *,
        transport: Transport | None = None,
    ) -> GitHubStarsClient:
        """Build a client from settings.

        Uses the database for cache and preferences when persistent storage
        is configured, in-memory preferences otherwise. The stored access
        token wins over GITHUB_TOKEN.
        """
        from github_stars.cache import SqlCollectionCache
        from github_stars.db import create_tables, make_engine, make_session_factory
        from github_stars.preferences import MemoryPreferenceStore, SqlPreferenceStore

        settings = settings or get_settings()
        cache: CollectionCache
        preferences: PreferenceStore
        engine: AsyncEngine | None = None

        if settings.cache.persistent:
            engine = make_engine(settings.database_url)
            await create_tables(engine)
            session_factory = make_session_factory(engine)
            cache = SqlCollectionCache(session_factory, settings.cache)
            preferences = SqlPreferenceStore(
                session_factory,
                cache_enabled_default=settings.cache.enabled_by_default,
            )
        else:
            cache = NullCache()
            preferences = MemoryPreferenceStore(cache_enabled=settings.cache.enabled_by_default)

        if transport is None:
            token = await preferences.get_access_token() or settings.github_token or None
            transport = GitHubKitTransport(token, base_url=settings.api_base_url)

        requester = RateLimitedRequester(
            transport,
            monitor=RateLimitMonitor(settings.rate_limit),
            backoff=BackoffPolicy.from_config(settings.backoff),
        )
        return cls(
            requester,
            cache=cache,
            preferences=preferences,
            cache_enabled=await preferences.get_cache_enabled(),
            paginator=Paginator(requester, settings.pagination),
            engine=engine,
        )

    @property
    def rate_monitor(self) -> RateLimitMonitor:
        """Rate limit observer; subscribe to follow quota changes."""
        return self._requester.monitor

    @property
    def paginator(self) -> Paginator:
        return self._paginator

    async def close(self) -> None:
        """Release the underlying transport and database engine."""
        await self._requester.transport.aclose()
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

    async def __aenter__(self) -> GitHubStarsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------
    def get_stargazers(
        self,
        repo_name: str,
        fields: FieldSpec | None = None,
    ) -> ProgressFuture[Records]:
        """All users who starred ``repo_name`` ("owner/repo")."""
        cache = self._cache
        return self._fetch_collection(
            "stargazers",
            repo_name,
            f"repos/{repo_name}/stargazers",
            fields,
            lookup=cache.get_followers,
            store=cache.save_followers,
        )

    def get_starred_projects(
        self,
        user_name: str,
        fields: FieldSpec | None = None,
    ) -> ProgressFuture[Records]:
        """All repositories starred by ``user_name``."""
        cache = self._cache
        return self._fetch_collection(
            "starred",
            user_name,
            f"users/{user_name}/starred",
            fields,
            lookup=cache.get_starred,
            store=cache.save_starred,
        )

    def _fetch_collection(
        self,
        kind: str,
        key: str,
        handler: str,
        fields: FieldSpec | None,
        *,
        lookup: Callable[[str], Awaitable[Records | None]],
        store: Callable[[str, Records], Awaitable[None]],
    ) -> ProgressFuture[Records]:
        log = bind_collection(kind, key)

        async def produce(download: ProgressFuture[Records]) -> Records:
            try:
                cached = await lookup(key)
            except Exception as e:
                log.warning("Cache lookup failed, fetching from GitHub: {}", e)
                cached = None

            if cached is not None:
                log.info("Serving {} records from cache", len(cached))
                download.report_progress(
                    ProgressReport(next_page=0, total_pages=0, per_page=len(cached), data=cached)
                )
                # Resolve on a later loop turn, like a network response would
                await asyncio.sleep(0)
                return cached

            pages = self._paginator.fetch_all(handler, fields)
            pages.on_progress(download.report_progress)
            records = await pages

            try:
                await store(key, records)
            except Exception as e:
                # A failed cache write must not lose a finished download
                log.warning("Could not cache {} records: {}", len(records), e)
            return records

        return ProgressFuture.run(produce)

    # -------------------------------------------------------------------------
    # Caching toggle
    # -------------------------------------------------------------------------
    @property
    def backing_cache(self) -> CollectionCache:
        """The configured store, whether or not caching is currently enabled."""
        return self._backing_cache

    @property
    def cache_supported(self) -> bool:
        return self._backing_cache.is_supported

    @property
    def cache_enabled(self) -> bool:
        """Whether collections are currently read from and written to the cache."""
        return self._cache is self._backing_cache

    async def set_caching(self, enabled: bool) -> None:
        """Persist the caching preference and switch strategy."""
        if self._preferences is not None:
            await self._preferences.set_cache_enabled(enabled)
        self._cache = select_cache(self._backing_cache, enabled)
        logger.info(
            "Caching {} (supported={})",
            "enabled" if enabled else "disabled",
            self.cache_supported,
        )
