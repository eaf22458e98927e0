"""Implementation of the 'finalize' command.

Run once the release is out: records the pending release under the
released version and date, then rewrites the change file on disk with an
empty group per configured category under a fresh pending release.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from rich.markup import escape

from nextver.cli.commands.common import load_lifecycle
from nextver.exceptions import ConfigNotFoundError, NextverError, VersionNotFoundError
from nextver.project.pyproject import get_pyproject_version

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def _released_version(root: Path) -> str | None:
    try:
        return get_pyproject_version(root / "pyproject.toml")
    except (ConfigNotFoundError, VersionNotFoundError):
        return None


def run_finalize(
    path: str | None,
    release_version: str | None,
    released_on: date | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the finalize command.

    Args:
        path: Optional path to project directory
        release_version: Version just released (defaults to pyproject.toml's)
        released_on: Release date (defaults to today)
        console: Console for standard output
        err_console: Console for error output
    """
    lifecycle = load_lifecycle(path, err_console)
    version = release_version or _released_version(lifecycle.distribution.root)

    try:
        stamped = lifecycle.stamp_release(version, released_on or date.today())
        lifecycle.after_release()
    except NextverError as e:
        err_console.print(f"[red]Error rewriting changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if stamped:
        console.print(f"[green]✓[/] Recorded release [green]{escape(str(version))}[/]")
    console.print(f"[green]✓[/] Reset pending release in {lifecycle.change_path}")
