"""Collection cache interface and strategy selection."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

Records = list[dict[str, Any]]


@runtime_checkable
class CollectionCache(Protocol):
    """Storage for fully downloaded collections.

    Lookups return None on a miss.
    """

    @property
    def is_supported(self) -> bool:
        """Whether this cache can persist anything at all."""
        ...

    async def get_followers(self, repo_name: str) -> Records | None: ...

    async def save_followers(self, repo_name: str, followers: Records) -> None: ...

    async def get_starred(self, user_name: str) -> Records | None: ...

    async def save_starred(self, user_name: str, starred: Records) -> None: ...


class NullCache:
    """Cache that never stores anything; used while caching is off."""

    @property
    def is_supported(self) -> bool:
        return False

    async def get_followers(self, repo_name: str) -> Records | None:
        return None

    async def save_followers(self, repo_name: str, followers: Records) -> None:
        return None

    async def get_starred(self, user_name: str) -> Records | None:
        return None

    async def save_starred(self, user_name: str, starred: Records) -> None:
        return None


def select_cache(backing: CollectionCache, enabled: bool) -> CollectionCache:
    """Pick the cache strategy: the backing store only if usable and enabled."""
    if backing.is_supported and enabled:
        return backing
    return NullCache()
