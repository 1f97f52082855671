"""Common CLI option factories and helpers.

This module provides:
- `run_async_command`: Unified async execution with error handling for CLI commands
- Shared option type aliases for the collection commands
- `status_style`: Rich markup for rate limit health
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Annotated, TypeVar

import typer
from rich.console import Console

from github_stars.github import GitHubAuthenticationError, GitHubClientError, RateLimitStatus

# Shared console instance for CLI output
console = Console()

T = TypeVar("T")


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Catches exceptions, prints user-friendly error messages, and exits with
    code 1.

    Example:
        async def _fetch() -> list[dict[str, Any]]:
            async with await GitHubStarsClient.create() as client:
                return await client.get_starred_projects("alice")

        starred = run_async_command(_fetch(), error_prefix="Fetch failed")
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        # Re-raise deliberate exits (e.g., from validation helpers)
        raise
    except GitHubAuthenticationError:
        console.print(f"[red]{error_prefix}:[/red] Invalid GitHub token")
        raise typer.Exit(1) from None
    except GitHubClientError as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


def status_style(status: RateLimitStatus) -> str:
    """Get rich style for status."""
    match status:
        case RateLimitStatus.HEALTHY:
            return "[green]HEALTHY[/green]"
        case RateLimitStatus.WARNING:
            return "[yellow]WARNING[/yellow]"
        case RateLimitStatus.CRITICAL:
            return "[red]CRITICAL[/red]"
        case RateLimitStatus.EXHAUSTED:
            return "[bold red]EXHAUSTED[/bold red]"
        case _:
            return str(status)


# Typer requires function calls as default arguments, which triggers B008.
# Using Annotated with a centralized type alias keeps the noqa in one place.

FieldsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--field",
        "-f",
        help="Keep only this field of each record (repeatable)",
    ),
]
"""Record projection option.

Usage:
    def command(fields: FieldsOption = None):
"""

MaxPagesOption = Annotated[
    int | None,
    typer.Option(
        "--max-pages",
        min=1,
        help="Give up after page 1 when the collection has more pages than this",
    ),
]
"""Fan-out veto option.

Usage:
    def command(max_pages: MaxPagesOption = None):
"""

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print the records as JSON instead of a table",
    ),
]


def validate_repo(repo: str) -> str:
    """Check a repository string is in owner/name format.

    Raises:
        typer.Exit(1): If format is invalid
    """
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        console.print("[red]Error:[/red] Repository must be in owner/name format")
        raise typer.Exit(1)
    return repo
