"""SQLAlchemy ORM models for GitHub Stars."""

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CollectionKind(str, Enum):
    """Kinds of collections kept in the cache."""

    STARGAZERS = "stargazers"  # keyed by "owner/repo"
    STARRED = "starred"  # keyed by user login


# ------------------------------------------------------------------------------
# Cached collection model
# ------------------------------------------------------------------------------
class CachedCollection(Base):
    """A fully downloaded collection, stored as one JSON document."""

    __tablename__ = "cached_collections"
    __table_args__ = (UniqueConstraint("kind", "key", name="uq_cached_collection_kind_key"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    kind: Mapped[str] = mapped_column(String(20))
    key: Mapped[str] = mapped_column(String(200))  # "owner/repo" or user login
    records: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    record_count: Mapped[int] = mapped_column(Integer, default=0)
    saved_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<CachedCollection({self.kind} {self.key}, {self.record_count} records)>"


# ------------------------------------------------------------------------------
# User preference model
# ------------------------------------------------------------------------------
class Preference(Base):
    """A persisted user preference (access token, caching toggle)."""

    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Preference({self.key})>"
