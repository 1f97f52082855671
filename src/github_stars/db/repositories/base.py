"""Base repository pattern implementation for async SQLAlchemy.

Provides common session handling and queries shared across repositories.
"""

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from github_stars.db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Base repository with common async session handling.

    Usage:
        class PreferenceRepository(BaseRepository[Preference]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, Preference)

    The caller owns the session lifecycle (see ``session_scope``).
    """

    def __init__(self, session: AsyncSession, model_class: type[ModelT]) -> None:
        self._session = session
        self._model_class = model_class

    @property
    def session(self) -> AsyncSession:
        """Access the underlying session."""
        return self._session

    async def _get_where(self, **criteria: object) -> ModelT | None:
        """Get the single entity matching all ``criteria`` (field=value)."""
        stmt = select(self._model_class).filter_by(**criteria)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def add(self, entity: ModelT) -> ModelT:
        """Add an entity to the session (does not flush)."""
        self._session.add(entity)
        return entity

    async def flush(self) -> None:
        await self._session.flush()

    async def delete(self, entity: ModelT) -> None:
        """Mark an entity for deletion (applied on flush/commit)."""
        await self._session.delete(entity)

    async def count(self) -> int:
        """Count total entities of this type."""
        stmt = select(func.count()).select_from(self._model_class)
        result = await self._session.execute(stmt)
        return result.scalar() or 0
