"""Database module for GitHub Stars (collection cache and preferences)."""

from github_stars.db.engine import (
    create_tables,
    dispose_engine,
    get_engine,
    get_session_factory,
    make_engine,
    make_session_factory,
    session_scope,
)
from github_stars.db.models import Base, CachedCollection, CollectionKind, Preference
from github_stars.db.repositories import (
    BaseRepository,
    CachedCollectionRepository,
    PreferenceRepository,
)

__all__ = [
    # Models
    "Base",
    "CachedCollection",
    "CollectionKind",
    "Preference",
    # Engine
    "create_tables",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
    "make_engine",
    "make_session_factory",
    "session_scope",
    # Repositories
    "BaseRepository",
    "CachedCollectionRepository",
    "PreferenceRepository",
]
