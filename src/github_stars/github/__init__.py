"""GitHub API client module.

This module provides:
- GitHubStarsClient: Stargazer and starred-project collections with caching
- RateLimitedRequester: Single requests with exponential backoff on exhaustion
- Paginator / ProgressFuture: Concurrent page fan-out with progress reports
- Rate limit monitoring: RateLimitMonitor, RateLimitSnapshot, RateLimitStatus
"""

from .backoff import BackoffPolicy, BackoffState
from .client import GitHubStarsClient
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubResponseError,
    GitHubTransportError,
    PaginationAbortedError,
    UnexpectedPayloadError,
)
from .pagination import (
    TOO_MANY_PAGES,
    Paginator,
    ProgressFuture,
    ProgressHandler,
    ProgressReport,
    ProgressState,
)
from .rate_limit import (
    RateLimitCallback,
    RateLimitMonitor,
    RateLimitSnapshot,
    RateLimitStatus,
)
from .requester import RateLimitedRequester, ResponseEnvelope
from .transport import GitHubKitTransport, Transport, TransportResponse

__all__ = [
    # Client
    "GitHubStarsClient",
    # Requests
    "BackoffPolicy",
    "BackoffState",
    "GitHubKitTransport",
    "RateLimitedRequester",
    "ResponseEnvelope",
    "Transport",
    "TransportResponse",
    # Pagination
    "Paginator",
    "ProgressFuture",
    "ProgressHandler",
    "ProgressReport",
    "ProgressState",
    "TOO_MANY_PAGES",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubNotFoundError",
    "GitHubResponseError",
    "GitHubTransportError",
    "PaginationAbortedError",
    "UnexpectedPayloadError",
    # Rate limit monitoring
    "RateLimitCallback",
    "RateLimitMonitor",
    "RateLimitSnapshot",
    "RateLimitStatus",
]
