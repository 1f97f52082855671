"""Collection cache: interface, null strategy and SQL-backed store."""

from .base import CollectionCache, NullCache, Records, select_cache
from .sql import SqlCollectionCache

__all__ = [
    "CollectionCache",
    "NullCache",
    "Records",
    "SqlCollectionCache",
    "select_cache",
]
