"""Repository pattern implementation for database access."""

from .base import BaseRepository
from .collection import CachedCollectionRepository
from .preference import PreferenceRepository

__all__ = [
    "BaseRepository",
    "CachedCollectionRepository",
    "PreferenceRepository",
]
