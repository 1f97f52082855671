"""GitHub client exceptions."""

from typing import Any


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubTransportError(GitHubClientError):
    """Raised when the request never produced an HTTP response.

    Connection failures and timeouts land here. They are surfaced to the
    caller immediately and never retried.
    """

    pass


class GitHubResponseError(GitHubClientError):
    """Raised when GitHub rejects a request with a non-200 status.

    Quota exhaustion (403 with no remaining requests) is handled by backoff
    and never reaches the caller as this error.
    """

    def __init__(self, status_code: int, body: Any = None, message: str | None = None) -> None:
        super().__init__(message or f"GitHub API error ({status_code})")
        self.status_code = status_code
        self.body = body


class GitHubAuthenticationError(GitHubResponseError):
    """Raised when authentication fails (401)."""

    pass


class GitHubNotFoundError(GitHubResponseError):
    """Raised when a resource is not found (404)."""

    pass


class UnexpectedPayloadError(GitHubClientError):
    """Raised when a list endpoint answers with something other than a list.

    Usually means the repository or user does not exist.
    """

    def __init__(self, payload: Any) -> None:
        super().__init__(f"Expected a list of records, got {type(payload).__name__}")
        self.payload = payload


class PaginationAbortedError(GitHubClientError):
    """Raised when a progress handler asks to stop before fan-out."""

    pass
