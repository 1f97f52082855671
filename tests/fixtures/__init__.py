"""Test fixtures for GitHub Stars."""

from .github_responses import (
    FakeTransport,
    error,
    make_link_header,
    make_repo,
    make_repos,
    make_user,
    make_users,
    ok,
    paged_responses,
    rate_limited,
)
from .rate_limit_responses import (
    HEADERS_CRITICAL,
    HEADERS_EXHAUSTED,
    HEADERS_HEALTHY,
    HEADERS_UNAUTHENTICATED,
    HEADERS_WARNING,
    make_rate_limit_headers,
)

__all__ = [
    # Transport and responses
    "FakeTransport",
    "error",
    "make_link_header",
    "ok",
    "paged_responses",
    "rate_limited",
    # Records
    "make_repo",
    "make_repos",
    "make_user",
    "make_users",
    # Rate limit headers
    "HEADERS_CRITICAL",
    "HEADERS_EXHAUSTED",
    "HEADERS_HEALTHY",
    "HEADERS_UNAUTHENTICATED",
    "HEADERS_WARNING",
    "make_rate_limit_headers",
]
