"""Persistent user preferences: access token and caching toggle."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from github_stars.db.engine import session_scope
from github_stars.db.repositories import PreferenceRepository

ACCESS_TOKEN_KEY = "access_token"
CACHE_ENABLED_KEY = "cache_enabled"


class PreferenceStore(Protocol):
    """Preferences that survive process restarts."""

    async def get_access_token(self) -> str | None: ...

    async def set_access_token(self, token: str | None) -> None: ...

    async def get_cache_enabled(self) -> bool: ...

    async def set_cache_enabled(self, enabled: bool) -> None: ...


class SqlPreferenceStore:
    """Preferences stored in the ``preferences`` table.

    Caching counts as enabled until the user explicitly turns it off.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        *,
        cache_enabled_default: bool = True,
    ) -> None:
        self._session_factory = session_factory
        self._cache_enabled_default = cache_enabled_default

    async def get_access_token(self) -> str | None:
        async with session_scope(self._session_factory) as session:
            return await PreferenceRepository(session).get_value(ACCESS_TOKEN_KEY) or None

    async def set_access_token(self, token: str | None) -> None:
        """Store a token; None or empty removes it."""
        async with session_scope(self._session_factory) as session:
            repo = PreferenceRepository(session)
            if token:
                await repo.set_value(ACCESS_TOKEN_KEY, token)
            else:
                await repo.remove(ACCESS_TOKEN_KEY)

    async def get_cache_enabled(self) -> bool:
        async with session_scope(self._session_factory) as session:
            value = await PreferenceRepository(session).get_value(CACHE_ENABLED_KEY)
        if value is None:
            return self._cache_enabled_default
        return value != "false"

    async def set_cache_enabled(self, enabled: bool) -> None:
        async with session_scope(self._session_factory) as session:
            await PreferenceRepository(session).set_value(
                CACHE_ENABLED_KEY, "true" if enabled else "false"
            )


class MemoryPreferenceStore:
    """Process-local preferences, for when nothing should touch disk."""

    def __init__(self, access_token: str | None = None, cache_enabled: bool = True) -> None:
        self._access_token = access_token
        self._cache_enabled = cache_enabled

    async def get_access_token(self) -> str | None:
        return self._access_token

    async def set_access_token(self, token: str | None) -> None:
        self._access_token = token or None

    async def get_cache_enabled(self) -> bool:
        return self._cache_enabled

    async def set_cache_enabled(self, enabled: bool) -> None:
        self._cache_enabled = enabled
