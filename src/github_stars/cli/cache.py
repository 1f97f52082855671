"""Cache management commands."""

import typer
from rich.table import Table

from github_stars.cache import SqlCollectionCache
from github_stars.cli.common import console, run_async_command
from github_stars.config import get_settings
from github_stars.db import create_tables, dispose_engine, get_session_factory
from github_stars.github import GitHubStarsClient

app = typer.Typer(help="Manage the collection cache")


def _on_off(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


@app.command("status")
def cache_status() -> None:
    """Show whether caching is available and enabled.

    Examples:
        ghstars cache status
    """

    async def _status() -> None:
        settings = get_settings()
        async with await GitHubStarsClient.create(settings) as client:
            table = Table(title="Collection Cache", show_header=False)
            table.add_column("Setting", style="cyan")
            table.add_column("Value")
            table.add_row("Supported", _on_off(client.cache_supported))
            table.add_row("Enabled", _on_off(client.cache_enabled))
            store = client.backing_cache
            if client.cache_supported and isinstance(store, SqlCollectionCache):
                stored = await store.count()
                table.add_row("Collections stored", str(stored))
                table.add_row("Database", settings.database_url)
            console.print(table)

    run_async_command(_status())


def _set_caching(enabled: bool) -> None:
    async def _set() -> bool:
        async with await GitHubStarsClient.create() as client:
            await client.set_caching(enabled)
            return client.cache_supported

    supported = run_async_command(_set(), error_prefix="Could not change caching")
    state = "enabled" if enabled else "disabled"
    console.print(f"[green]Caching {state}.[/green]")
    if enabled and not supported:
        console.print(
            "[yellow]Warning:[/yellow] persistent storage is turned off "
            "(CACHE__PERSISTENT=false); nothing will be cached."
        )


@app.command("enable")
def cache_enable() -> None:
    """Serve collections from the cache when available."""
    _set_caching(True)


@app.command("disable")
def cache_disable() -> None:
    """Always fetch collections from GitHub."""
    _set_caching(False)


@app.command("clear")
def cache_clear() -> None:
    """Delete every cached collection."""
    settings = get_settings()
    if not settings.cache.persistent:
        console.print("[yellow]Persistent storage is turned off; nothing to clear.[/yellow]")
        return

    async def _clear() -> int:
        try:
            await create_tables()
            return await SqlCollectionCache(get_session_factory(), settings.cache).clear()
        finally:
            await dispose_engine()

    removed = run_async_command(_clear(), error_prefix="Could not clear cache")
    console.print(f"[green]Removed {removed} cached collection(s).[/green]")
