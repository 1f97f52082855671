"""Exponential backoff policy for rate limit exhaustion."""

from __future__ import annotations

from dataclasses import dataclass

from github_stars.config import BackoffConfig, get_settings


@dataclass(frozen=True)
class BackoffPolicy:
    """Wait schedule applied while GitHub reports an exhausted quota.

    Each retry sleeps ``previous * multiplier`` seconds, capped at
    ``max_wait``. With the defaults (seed 5s, x2, 30 minute ceiling) the
    sleeps are 10, 20, 40, ... 1280, 1800, 1800, ...
    """

    initial_wait: float = 5.0
    multiplier: float = 2.0
    max_wait: float = 30 * 60

    @classmethod
    def from_config(cls, config: BackoffConfig | None = None) -> BackoffPolicy:
        config = config or get_settings().backoff
        return cls(
            initial_wait=config.initial_wait_seconds,
            multiplier=config.multiplier,
            max_wait=config.max_wait_seconds,
        )

    def next_wait(self, current: float) -> float:
        """Wait to use for the retry that follows a ``current``-second wait."""
        return min(current * self.multiplier, self.max_wait)

    def start(self, wait: float | None = None) -> BackoffState:
        """Begin tracking one logical request, optionally with a custom seed.

        A missing or non-positive seed falls back to ``initial_wait``.
        """
        if wait is None or wait <= 0:
            wait = self.initial_wait
        return BackoffState(policy=self, wait=wait)


@dataclass
class BackoffState:
    """Retry bookkeeping owned by a single logical request."""

    policy: BackoffPolicy
    wait: float
    attempts: int = 0

    def advance(self) -> float:
        """Record a rate-limited attempt and return the seconds to sleep."""
        self.attempts += 1
        self.wait = self.policy.next_wait(self.wait)
        return self.wait
