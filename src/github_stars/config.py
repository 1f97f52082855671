"""Configuration settings for GitHub Stars."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackoffConfig(BaseModel):
    """Configuration for rate limit backoff.

    When GitHub answers 403 with an exhausted quota, the same request is
    retried after a wait that grows by ``multiplier`` on every attempt and
    is capped by ``max_wait_seconds``.
    """

    initial_wait_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Seed wait; the first retry sleeps seed * multiplier",
    )
    multiplier: float = Field(
        default=2.0,
        ge=1.0,
        description="Growth factor applied to the wait on every retry",
    )
    max_wait_seconds: float = Field(
        default=30 * 60,
        gt=0.0,
        description="Ceiling for a single backoff sleep (30 minutes)",
    )


class PaginationConfig(BaseModel):
    """Configuration for page fan-out."""

    per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Records requested per page (GitHub caps this at 100)",
    )


class RateLimitConfig(BaseModel):
    """Configuration for rate limit status reporting.

    Controls thresholds for health status determination.
    """

    healthy_threshold_pct: float = Field(
        default=50.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is HEALTHY",
    )
    warning_threshold_pct: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is WARNING (below healthy)",
    )


class CacheConfig(BaseModel):
    """Configuration for the collection cache."""

    persistent: bool = Field(
        default=True,
        description="Whether persistent storage is available for caching",
    )
    enabled_by_default: bool = Field(
        default=True,
        description="Caching state used until the user toggles it explicitly",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Controls file logging, rotation, and output format.
    """

    log_file: str | None = Field(
        default=None,
        description="Optional path for file logging (enables rotation)",
    )
    rotation: str = Field(
        default="10 MB",
        description="When to rotate log file (e.g., '10 MB', '1 day')",
    )
    retention: str = Field(
        default="7 days",
        description="How long to keep rotated logs",
    )
    serialize: bool = Field(
        default=False,
        description="If True, output JSON format to file",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # Database (cache + preferences)
    # --------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite+aiosqlite:///./github_stars.db",
        description="Async SQLite database connection string",
    )

    # --------------------------------------------------------------------------
    # GitHub API
    # --------------------------------------------------------------------------
    github_token: str = Field(
        default="",
        description="GitHub personal access token (fallback when none is stored)",
    )
    api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API endpoint",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # --------------------------------------------------------------------------
    # Backoff, Pagination & Rate Limits
    # --------------------------------------------------------------------------
    backoff: BackoffConfig = Field(
        default_factory=BackoffConfig,
        description="Rate limit backoff configuration",
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig,
        description="Page fan-out configuration",
    )
    rate_limit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Rate limit status configuration",
    )

    # --------------------------------------------------------------------------
    # Cache Configuration
    # --------------------------------------------------------------------------
    cache: CacheConfig = Field(
        default_factory=CacheConfig,
        description="Collection cache configuration",
    )

    # --------------------------------------------------------------------------
    # Logging Configuration
    # --------------------------------------------------------------------------
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration (file output, rotation)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
