"""Main CLI application for GitHub Stars."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from github_stars import __version__
from github_stars.cli import cache as cache_cmd
from github_stars.cli import stars as stars_cmd
from github_stars.cli import token as token_cmd
from github_stars.config import get_settings
from github_stars.logging import setup_logging

app = typer.Typer(
    name="ghstars",
    help="Fetch complete stargazer and starred-project lists from GitHub.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ghstars version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """GitHub Stars - every stargazer, every starred project."""
    settings = get_settings()
    log_config = settings.logging

    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


app.command("stargazers")(stars_cmd.stargazers)
app.command("starred")(stars_cmd.starred)

# Register subcommands
app.add_typer(cache_cmd.app, name="cache")
app.add_typer(token_cmd.app, name="token")


if __name__ == "__main__":
    app()
