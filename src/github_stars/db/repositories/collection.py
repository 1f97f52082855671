"""Repository for cached collections."""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from github_stars.db.models import CachedCollection, CollectionKind

from .base import BaseRepository


class CachedCollectionRepository(BaseRepository[CachedCollection]):
    """Data access for the ``cached_collections`` table."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CachedCollection)

    async def get(self, kind: CollectionKind, key: str) -> CachedCollection | None:
        return await self._get_where(kind=kind.value, key=key)

    async def upsert(
        self,
        kind: CollectionKind,
        key: str,
        records: list[dict[str, Any]],
    ) -> CachedCollection:
        """Store ``records`` under (kind, key), replacing any previous copy."""
        entity = await self.get(kind, key)
        if entity is None:
            entity = self.add(CachedCollection(kind=kind.value, key=key))
        entity.records = list(records)
        entity.record_count = len(records)
        await self.flush()
        return entity

    async def delete_all(self, kind: CollectionKind | None = None) -> int:
        """Delete cached collections, optionally of one kind only.

        Returns:
            Number of rows deleted
        """
        stmt = delete(CachedCollection)
        if kind is not None:
            stmt = stmt.where(CachedCollection.kind == kind.value)
        result = await self._session.execute(stmt)
        return result.rowcount or 0
