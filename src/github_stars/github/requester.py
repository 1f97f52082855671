"""Single-page GitHub requests with rate limit backoff.

RateLimitedRequester issues one GET per attempt, publishes the quota
state from every response, and keeps retrying the same request while
GitHub reports an exhausted quota (403 with zero requests remaining).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from github_stars.logging import get_logger

from .backoff import BackoffPolicy
from .exceptions import (
    GitHubAuthenticationError,
    GitHubNotFoundError,
    GitHubResponseError,
)
from .pagination.links import LinkRelation, parse_link_header
from .rate_limit import RateLimitMonitor, RateLimitSnapshot
from .transport import Transport, TransportResponse

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


@dataclass
class ResponseEnvelope:
    """Decoded 200 response plus the metadata GitHub sends beside it."""

    status_code: int
    data: Any
    links: list[LinkRelation] = field(default_factory=list)
    rate_limit: RateLimitSnapshot | None = None


class RateLimitedRequester:
    """Issues GitHub requests, absorbing rate limit exhaustion.

    Usage:
        monitor = RateLimitMonitor()
        requester = RateLimitedRequester(transport, monitor=monitor)
        envelope = await requester.request("users/alice/starred", {"page": 1})

    Exhaustion is retried indefinitely, waiting longer each time up to the
    policy ceiling. Callers needing a deadline wrap the call in
    ``asyncio.timeout()``.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        monitor: RateLimitMonitor | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the requester.

        Args:
            transport: HTTP transport used for every attempt
            monitor: Receives a snapshot from every response (created if omitted)
            backoff: Wait schedule for exhausted quota (from settings if omitted)
            sleep: Coroutine function used for backoff sleeps
        """
        self._transport = transport
        self._monitor = monitor or RateLimitMonitor()
        self._backoff = backoff or BackoffPolicy.from_config()
        self._sleep = sleep

    @property
    def monitor(self) -> RateLimitMonitor:
        """The rate limit observer fed by this requester."""
        return self._monitor

    @property
    def transport(self) -> Transport:
        return self._transport

    async def request(
        self,
        handler: str,
        params: Mapping[str, Any] | None = None,
        wait_seconds: float | None = None,
    ) -> ResponseEnvelope:
        """Fetch one GitHub endpoint.

        Args:
            handler: Endpoint path, e.g. "repos/owner/name/stargazers"
            params: Query parameters
            wait_seconds: Backoff seed; the first retry waits seed * multiplier

        Returns:
            ResponseEnvelope for the eventual 200 response

        Raises:
            ValueError: If handler is empty
            GitHubResponseError: On any non-200 status other than exhaustion
            GitHubTransportError: If no response was received
        """
        if not handler or not handler.strip("/"):
            raise ValueError("handler must be a non-empty path")

        query = dict(params or {})
        state = self._backoff.start(wait_seconds)

        while True:
            response = await self._transport.get(handler, query)
            snapshot = self._monitor.update_from_headers(response.headers)

            if response.status_code == 403 and snapshot is not None and snapshot.is_exhausted:
                wait = state.advance()
                logger.warning(
                    "Rate limit exhausted on {} (limit={}), retry #{} in {:.0f}s",
                    handler,
                    snapshot.limit,
                    state.attempts,
                    wait,
                )
                await self._sleep(wait)
                continue

            if response.status_code == 200:
                return ResponseEnvelope(
                    status_code=response.status_code,
                    data=response.body,
                    links=parse_link_header(_header(response, "link")),
                    rate_limit=snapshot,
                )

            raise self._handle_error(handler, response)

    def _handle_error(self, handler: str, response: TransportResponse) -> GitHubResponseError:
        """Convert a rejected response into our exception types."""
        status = response.status_code
        logger.debug("GET {} rejected with status {}", handler, status)

        if status == 401:
            return GitHubAuthenticationError(status, response.body, "Invalid GitHub token")
        if status == 404:
            return GitHubNotFoundError(status, response.body, f"Not found: {handler}")
        return GitHubResponseError(
            status,
            response.body,
            f"GitHub API error ({status}) for {handler}",
        )


def _header(response: TransportResponse, name: str) -> str | None:
    for key, value in response.headers.items():
        if key.lower() == name:
            return value
    return None
