"""HTTP transport for GitHub REST calls.

The requester only needs "GET this path, tell me status, headers and body".
GitHubKitTransport provides that on top of githubkit, turning githubkit's
error-status exceptions back into plain responses so that status handling
(including rate limit backoff) stays in one place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from githubkit import GitHub
from githubkit.exception import RequestError, RequestFailed, RequestTimeout

from github_stars.config import get_settings
from github_stars.logging import get_logger

from .exceptions import GitHubTransportError

logger = get_logger(__name__)


@dataclass
class TransportResponse:
    """Raw outcome of one HTTP round trip."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


class Transport(Protocol):
    """Anything that can GET a GitHub API path."""

    async def get(self, path: str, params: Mapping[str, Any]) -> TransportResponse:
        """Issue one GET request.

        Must return error statuses as responses and raise
        GitHubTransportError only when no response was received.
        """
        ...

    async def aclose(self) -> None: ...


def _decode_body(response: Any) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class GitHubKitTransport:
    """Transport backed by githubkit's async client.

    Usage:
        async with GitHubKitTransport(token="ghp_...") as transport:
            resp = await transport.get("users/alice/starred", {"page": 1})

    githubkit's own rate limit retry is disabled; exhaustion is handled by
    RateLimitedRequester's backoff.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            token: GitHub token; None or empty means unauthenticated requests.
            base_url: API endpoint. Defaults to the configured api_base_url.
        """
        self._token = token or None
        self._base_url = base_url or get_settings().api_base_url
        self._client: GitHub[Any] | None = None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            self._client = GitHub(self._token, base_url=self._base_url, auto_retry=False)
        return self._client

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    async def get(self, path: str, params: Mapping[str, Any]) -> TransportResponse:
        url = path.lstrip("/")
        try:
            response = await self._github.arequest("GET", url, params=dict(params))
        except RequestFailed as e:
            # Error statuses are ordinary responses at this layer
            response = e.response
        except (RequestError, RequestTimeout) as e:
            logger.debug("GET {} failed without a response: {}", url, e)
            raise GitHubTransportError(f"GET {url} failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            body=_decode_body(response),
        )

    async def aclose(self) -> None:
        """Drop the underlying client."""
        self._client = None

    async def __aenter__(self) -> GitHubKitTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()
