"""Rate limit observation for GitHub API.

The requester publishes a snapshot from every response it receives,
including the 403 responses that put it into backoff, so subscribers see
the quota state while a download is stalled.

Key Features:
- Passive tracking from response headers (zero API cost)
- Sync or async subscriber callbacks
- Last-writer-wins snapshot
- Configurable health thresholds
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from github_stars.config import RateLimitConfig, get_settings
from github_stars.logging import get_logger

from .schemas import RateLimitSnapshot, RateLimitStatus

logger = get_logger(__name__)

RateLimitCallback = Callable[[RateLimitSnapshot], Awaitable[None] | None]


class RateLimitMonitor:
    """Holds the latest rate limit snapshot and notifies subscribers.

    Usage:
        monitor = RateLimitMonitor()
        unsubscribe = monitor.subscribe(
            lambda snap: print(f"{snap.remaining}/{snap.limit} left")
        )
        requester = RateLimitedRequester(transport, monitor=monitor)
        ...
        unsubscribe()

    Delivery is fire-and-forget: a failing subscriber is logged and the
    remaining subscribers still run.
    """

    def __init__(self, config: RateLimitConfig | None = None) -> None:
        """Initialize the rate limit monitor.

        Args:
            config: Optional rate limit configuration (uses settings if not provided)
        """
        self._config = config or get_settings().rate_limit
        self._snapshot: RateLimitSnapshot | None = None
        self._subscribers: list[RateLimitCallback] = []
        self._callback_tasks: set[asyncio.Task[None]] = set()  # Prevent task GC

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------
    def subscribe(self, callback: RateLimitCallback) -> Callable[[], bool]:
        """Register a callback for every new snapshot.

        Args:
            callback: Async or sync function receiving the snapshot

        Returns:
            A function that removes the subscription when called
        """
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: RateLimitCallback) -> bool:
        """Remove a previously registered callback.

        Returns:
            True if callback was found and removed
        """
        try:
            self._subscribers.remove(callback)
            return True
        except ValueError:
            return False

    # -------------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------------
    def publish(self, snapshot: RateLimitSnapshot) -> None:
        """Store a snapshot and notify every subscriber."""
        self._snapshot = snapshot
        for callback in list(self._subscribers):
            try:
                result = callback(snapshot)
                if asyncio.iscoroutine(result):
                    task = asyncio.create_task(result)
                    self._callback_tasks.add(task)
                    task.add_done_callback(self._callback_done)
            except Exception as e:
                logger.error("Rate limit subscriber failed: {}", e)

    def _callback_done(self, task: asyncio.Task[None]) -> None:
        self._callback_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Rate limit subscriber failed: {}", task.exception())

    def update_from_headers(self, headers: Mapping[str, str]) -> RateLimitSnapshot | None:
        """Parse rate limit headers and publish the result.

        Args:
            headers: HTTP response headers

        Returns:
            The published snapshot, or None if the headers carried no quota info
        """
        snapshot = RateLimitSnapshot.from_response_headers(headers)
        if snapshot is not None:
            self.publish(snapshot)
        return snapshot

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------
    @property
    def snapshot(self) -> RateLimitSnapshot | None:
        """Most recent snapshot (None until a response has been seen)."""
        return self._snapshot

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def get_status(self) -> RateLimitStatus:
        """Get health status of the quota.

        Returns:
            RateLimitStatus enum value (HEALTHY if unknown)
        """
        if self._snapshot is None:
            return RateLimitStatus.HEALTHY
        return self._snapshot.get_status(
            self._config.healthy_threshold_pct,
            self._config.warning_threshold_pct,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export current state as dictionary (for logging/CLI output)."""
        if self._snapshot is None:
            return {"known": False}
        return {
            "known": True,
            "limit": self._snapshot.limit,
            "remaining": self._snapshot.remaining,
            "remaining_percent": round(self._snapshot.remaining_percent, 2),
            "status": self.get_status().value,
            "timestamp": self._snapshot.timestamp.isoformat(),
        }
