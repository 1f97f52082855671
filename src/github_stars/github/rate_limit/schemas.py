"""Pydantic schemas for GitHub API rate limit data.

Rate limit state is read from the ``x-ratelimit-*`` headers GitHub sends
on every response.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, computed_field

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"


class RateLimitStatus(StrEnum):
    """Rate limit health status.

    Thresholds are configurable but defaults are:
    - HEALTHY: > 50% remaining
    - WARNING: 20-50% remaining
    - CRITICAL: below 20% remaining
    - EXHAUSTED: 0 remaining
    """

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    EXHAUSTED = "exhausted"


def _parse_count(value: str | None) -> int:
    """Parse a header counter; anything unparsable counts as 0."""
    try:
        return max(0, int(value)) if value is not None else 0
    except ValueError:
        return 0


class RateLimitSnapshot(BaseModel):
    """Quota state reported by the most recent response."""

    limit: int = Field(ge=0, description="Maximum requests allowed per window")
    remaining: int = Field(ge=0, description="Requests remaining in current window")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When this snapshot was taken",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_percent(self) -> float:
        """Percentage of rate limit remaining (0.0 to 100.0)."""
        if self.limit == 0:
            return 0.0
        return (self.remaining / self.limit) * 100

    @property
    def is_exhausted(self) -> bool:
        """Whether no requests are left in the current window."""
        return self.remaining == 0

    @classmethod
    def from_response_headers(cls, headers: Mapping[str, str]) -> Self | None:
        """Parse from HTTP response headers.

        Header names are matched case-insensitively. Returns None when the
        response carries no rate limit headers at all.

        Args:
            headers: HTTP response headers

        Returns:
            RateLimitSnapshot, or None if the headers are missing
        """
        normalized = {key.lower(): value for key, value in headers.items()}
        if LIMIT_HEADER not in normalized and REMAINING_HEADER not in normalized:
            return None
        return cls(
            limit=_parse_count(normalized.get(LIMIT_HEADER)),
            remaining=_parse_count(normalized.get(REMAINING_HEADER)),
        )

    def get_status(
        self,
        healthy_threshold: float = 50.0,
        warning_threshold: float = 20.0,
    ) -> RateLimitStatus:
        """Determine rate limit health status.

        Args:
            healthy_threshold: % remaining above which is HEALTHY
            warning_threshold: % remaining above which is WARNING; anything
                non-zero below it is CRITICAL

        Returns:
            RateLimitStatus enum value
        """
        if self.remaining == 0:
            return RateLimitStatus.EXHAUSTED
        if self.remaining_percent >= healthy_threshold:
            return RateLimitStatus.HEALTHY
        if self.remaining_percent >= warning_threshold:
            return RateLimitStatus.WARNING
        return RateLimitStatus.CRITICAL
