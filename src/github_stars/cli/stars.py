"""Collection commands: stargazers of a repository, starred projects of a user."""

import json
from collections.abc import Callable
from typing import Any

import typer
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from github_stars.cli.common import (
    FieldsOption,
    JsonOption,
    MaxPagesOption,
    console,
    run_async_command,
    status_style,
    validate_repo,
)
from github_stars.github import (
    GitHubStarsClient,
    ProgressFuture,
    ProgressReport,
    RateLimitSnapshot,
    RateLimitStatus,
)

Records = list[dict[str, Any]]

STARGAZER_COLUMNS = ["login", "html_url"]
STARRED_COLUMNS = ["full_name", "stargazers_count", "description"]
TABLE_ROWS = 20


def stargazers(
    repo: str = typer.Argument(
        ...,
        help="Repository in owner/name format (e.g., tiangolo/typer)",
    ),
    fields: FieldsOption = None,
    max_pages: MaxPagesOption = None,
    as_json: JsonOption = False,
) -> None:
    """List every user who starred a repository.

    Examples:
        ghstars stargazers tiangolo/typer
        ghstars stargazers tiangolo/typer -f login --json
        ghstars stargazers torvalds/linux --max-pages 10
    """
    repo = validate_repo(repo)
    records = _download(
        lambda client: client.get_stargazers(repo, fields),
        label=f"Stargazers of {repo}",
        max_pages=max_pages,
    )
    _print_records(records, fields or STARGAZER_COLUMNS, as_json, title=f"Stargazers of {repo}")


def starred(
    user: str = typer.Argument(..., help="GitHub login"),
    fields: FieldsOption = None,
    max_pages: MaxPagesOption = None,
    as_json: JsonOption = False,
) -> None:
    """List every repository a user has starred.

    Examples:
        ghstars starred octocat
        ghstars starred octocat -f full_name -f language
    """
    records = _download(
        lambda client: client.get_starred_projects(user, fields),
        label=f"Starred by {user}",
        max_pages=max_pages,
    )
    _print_records(records, fields or STARRED_COLUMNS, as_json, title=f"Starred by {user}")


def _download(
    fetch: Callable[[GitHubStarsClient], ProgressFuture[Records]],
    *,
    label: str,
    max_pages: int | None,
) -> Records:
    """Run a collection fetch behind a progress bar."""

    async def _run() -> Records:
        async with await GitHubStarsClient.create() as client:
            with Progress(
                TextColumn("[bold]{task.description}[/bold]"),
                BarColumn(bar_width=40),
                TextColumn("{task.completed:.0f} of {task.fields[expected]} loaded"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task(label, total=None, expected="?")
                loaded = 0
                last_status = RateLimitStatus.HEALTHY

                def on_rate_limit(snapshot: RateLimitSnapshot) -> None:
                    nonlocal last_status
                    status = client.rate_monitor.get_status()
                    if status != last_status:
                        last_status = status
                        progress.console.print(
                            f"Rate limit {status_style(status)}: "
                            f"{snapshot.remaining}/{snapshot.limit} remaining"
                        )

                def on_progress(report: ProgressReport) -> bool:
                    nonlocal loaded
                    loaded += len(report.data)
                    expected = _expected_records(report, loaded)
                    progress.update(task, completed=loaded, total=expected, expected=expected)
                    return max_pages is not None and (report.total_pages or 0) > max_pages

                unsubscribe = client.rate_monitor.subscribe(on_rate_limit)
                try:
                    return await fetch(client).on_progress(on_progress)
                finally:
                    unsubscribe()

    return run_async_command(_run(), error_prefix="Fetch failed")


def _expected_records(report: ProgressReport, loaded: int) -> int:
    """Estimated collection size: full pages up to the last one announced."""
    if not report.total_pages:
        return loaded
    return max(loaded, report.total_pages * report.per_page)


def _print_records(records: Records, columns: list[str], as_json: bool, *, title: str) -> None:
    if as_json:
        console.print_json(json.dumps(records))
        return

    table = Table(title=title)
    for column in columns:
        table.add_column(column, overflow="fold")
    for record in records[:TABLE_ROWS]:
        table.add_row(*("" if record.get(c) is None else str(record.get(c)) for c in columns))

    console.print(table)
    if len(records) > TABLE_ROWS:
        console.print(f"  ... and {len(records) - TABLE_ROWS} more")
    console.print(f"[green]Loaded {len(records)} records[/green]")
