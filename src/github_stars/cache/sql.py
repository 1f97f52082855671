"""SQLAlchemy-backed collection cache."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from github_stars.config import CacheConfig, get_settings
from github_stars.db.engine import session_scope
from github_stars.db.models import CollectionKind
from github_stars.db.repositories import CachedCollectionRepository
from github_stars.logging import get_logger

from .base import Records

logger = get_logger(__name__)


class SqlCollectionCache:
    """Stores each collection as one JSON row in ``cached_collections``.

    Usage:
        cache = SqlCollectionCache(get_session_factory())
        await cache.save_starred("alice", starred)
        cached = await cache.get_starred("alice")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        config: CacheConfig | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._supported = (config or get_settings().cache).persistent

    @property
    def is_supported(self) -> bool:
        return self._supported

    async def _get(self, kind: CollectionKind, key: str) -> Records | None:
        async with session_scope(self._session_factory) as session:
            entity = await CachedCollectionRepository(session).get(kind, key)
            if entity is None:
                logger.debug("Cache miss for {} {}", kind.value, key)
                return None
            logger.debug("Cache hit for {} {} ({} records)", kind.value, key, entity.record_count)
            return list(entity.records)

    async def _save(self, kind: CollectionKind, key: str, records: Records) -> None:
        async with session_scope(self._session_factory) as session:
            await CachedCollectionRepository(session).upsert(kind, key, records)
        logger.debug("Cached {} {} ({} records)", kind.value, key, len(records))

    async def get_followers(self, repo_name: str) -> Records | None:
        return await self._get(CollectionKind.STARGAZERS, repo_name)

    async def save_followers(self, repo_name: str, followers: Records) -> None:
        await self._save(CollectionKind.STARGAZERS, repo_name, followers)

    async def get_starred(self, user_name: str) -> Records | None:
        return await self._get(CollectionKind.STARRED, user_name)

    async def save_starred(self, user_name: str, starred: Records) -> None:
        await self._save(CollectionKind.STARRED, user_name, starred)

    async def clear(self) -> int:
        """Drop every cached collection. Returns the number removed."""
        async with session_scope(self._session_factory) as session:
            removed = await CachedCollectionRepository(session).delete_all()
        logger.info("Cleared {} cached collections", removed)
        return removed

    async def count(self) -> int:
        """Number of cached collections."""
        async with session_scope(self._session_factory) as session:
            return await CachedCollectionRepository(session).count()
