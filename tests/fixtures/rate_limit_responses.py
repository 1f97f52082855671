"""Mock GitHub rate limit header fixtures.

GitHub reports quota state on every REST response through the
``x-ratelimit-*`` headers.

See: https://docs.github.com/en/rest/using-the-rest-api/rate-limits-for-the-rest-api
"""

import time


def make_rate_limit_headers(
    remaining: int = 4999,
    limit: int = 5000,
    used: int | None = None,
    reset_in_seconds: int = 3600,
    resource: str = "core",
) -> dict[str, str]:
    """Create rate limit headers as returned by GitHub API.

    Args:
        remaining: Requests remaining in window
        limit: Maximum requests allowed
        used: Requests used in window (defaults to limit - remaining)
        reset_in_seconds: Seconds until reset
        resource: Rate limit resource pool

    Returns:
        Dict of header name -> value (all strings)
    """
    return {
        "x-ratelimit-limit": str(limit),
        "x-ratelimit-remaining": str(remaining),
        "x-ratelimit-used": str(limit - remaining if used is None else used),
        "x-ratelimit-reset": str(int(time.time()) + reset_in_seconds),
        "x-ratelimit-resource": resource,
    }


# -----------------------------------------------------------------------------
# Canned header sets
# -----------------------------------------------------------------------------

# 90% remaining
HEADERS_HEALTHY = make_rate_limit_headers(remaining=4500)

# 30% remaining
HEADERS_WARNING = make_rate_limit_headers(remaining=1500)

# 10% remaining
HEADERS_CRITICAL = make_rate_limit_headers(remaining=500)

# Nothing left; GitHub answers 403
HEADERS_EXHAUSTED = make_rate_limit_headers(remaining=0)

# Anonymous requests get 60 per hour
HEADERS_UNAUTHENTICATED = make_rate_limit_headers(remaining=59, limit=60)

RATE_LIMIT_EXCEEDED_BODY = {
    "message": "API rate limit exceeded for user ID 1.",
    "documentation_url": "https://docs.github.com/rest/overview/resources-in-the-rest-api#rate-limiting",
}
