"""Access token commands.

A stored token takes precedence over the GITHUB_TOKEN environment variable.
"""

import typer

from github_stars.cli.common import console, run_async_command
from github_stars.config import get_settings
from github_stars.db import create_tables, dispose_engine, get_session_factory
from github_stars.preferences import SqlPreferenceStore

app = typer.Typer(help="Manage the stored GitHub access token")


def _mask(token: str) -> str:
    """Show only the last four characters of a token."""
    if len(token) <= 4:
        return "*" * len(token)
    return "*" * (len(token) - 4) + token[-4:]


def _store() -> SqlPreferenceStore:
    if not get_settings().cache.persistent:
        console.print(
            "[red]Error:[/red] Persistent storage is turned off; "
            "use the GITHUB_TOKEN environment variable instead"
        )
        raise typer.Exit(1)
    return SqlPreferenceStore(get_session_factory())


@app.command("set")
def token_set(token: str = typer.Argument(..., help="Personal access token")) -> None:
    """Store an access token for all later requests.

    Examples:
        ghstars token set ghp_xxxxxxxxxxxxxxxxxxxx
    """
    store = _store()

    async def _set() -> None:
        try:
            await create_tables()
            await store.set_access_token(token)
        finally:
            await dispose_engine()

    run_async_command(_set(), error_prefix="Could not store token")
    console.print(f"[green]Token stored[/green] ({_mask(token)})")


@app.command("clear")
def token_clear() -> None:
    """Forget the stored access token."""
    store = _store()

    async def _clear() -> None:
        try:
            await create_tables()
            await store.set_access_token(None)
        finally:
            await dispose_engine()

    run_async_command(_clear(), error_prefix="Could not clear token")
    console.print("[green]Stored token removed.[/green]")


@app.command("show")
def token_show() -> None:
    """Show which access token will be used (masked)."""
    settings = get_settings()

    async def _show() -> str | None:
        if not settings.cache.persistent:
            return None
        try:
            await create_tables()
            return await SqlPreferenceStore(get_session_factory()).get_access_token()
        finally:
            await dispose_engine()

    stored = run_async_command(_show())
    if stored:
        console.print(f"Using stored token {_mask(stored)}")
    elif settings.github_token:
        console.print(f"Using GITHUB_TOKEN {_mask(settings.github_token)}")
    else:
        console.print("[yellow]No token configured; requests are unauthenticated.[/yellow]")
