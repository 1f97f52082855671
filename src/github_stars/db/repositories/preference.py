"""Repository for user preferences."""

from sqlalchemy.ext.asyncio import AsyncSession

from github_stars.db.models import Preference

from .base import BaseRepository


class PreferenceRepository(BaseRepository[Preference]):
    """Key/value access to the ``preferences`` table."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Preference)

    async def get_value(self, key: str) -> str | None:
        entity = await self._session.get(Preference, key)
        return entity.value if entity is not None else None

    async def set_value(self, key: str, value: str) -> None:
        entity = await self._session.get(Preference, key)
        if entity is None:
            self.add(Preference(key=key, value=value))
        else:
            entity.value = value
        await self.flush()

    async def remove(self, key: str) -> bool:
        """Delete a preference. Returns False if it was not set."""
        entity = await self._session.get(Preference, key)
        if entity is None:
            return False
        await self.delete(entity)
        await self.flush()
        return True
