"""nextver command line application."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from nextver import __version__

app = typer.Typer(
    name="nextver",
    help="Compute the next version from a categorized changelog.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"nextver {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Compute the next version from a categorized changelog."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
    )


@app.command("next")
def next_command(
    path: Optional[str] = typer.Argument(None, help="Project directory"),
    execute: bool = typer.Option(False, "--execute", help="Write the version to pyproject.toml"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print the bare version only"),
) -> None:
    """Compute the next version from the pending release."""
    from nextver.cli.commands.next import run_next

    run_next(path, execute, quiet, console, err_console)


@app.command("check")
def check_command(
    path: Optional[str] = typer.Argument(None, help="Project directory"),
) -> None:
    """Fail unless the pending release records changes."""
    from nextver.cli.commands.check import run_check

    run_check(path, console, err_console)


@app.command("finalize")
def finalize_command(
    path: Optional[str] = typer.Argument(None, help="Project directory"),
    release_version: Optional[str] = typer.Option(
        None,
        "--release-version",
        "-r",
        help="Version just released (defaults to the one in pyproject.toml)",
    ),
    released_on: Optional[datetime] = typer.Option(
        None,
        "--date",
        formats=["%Y-%m-%d"],
        help="Release date (defaults to today)",
    ),
) -> None:
    """Record the release and reset the pending release with placeholder groups."""
    from nextver.cli.commands.finalize import run_finalize

    run_finalize(
        path,
        release_version,
        released_on.date() if released_on else None,
        console,
        err_console,
    )


if __name__ == "__main__":
    app()
