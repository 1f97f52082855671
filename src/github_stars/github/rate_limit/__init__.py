"""Rate limit tracking for GitHub API.

Snapshots are parsed from response headers and broadcast to subscribers
through the RateLimitMonitor owned by the requester.
"""

from .monitor import RateLimitCallback, RateLimitMonitor
from .schemas import RateLimitSnapshot, RateLimitStatus

__all__ = [
    "RateLimitCallback",
    "RateLimitMonitor",
    "RateLimitSnapshot",
    "RateLimitStatus",
]
