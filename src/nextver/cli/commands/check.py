"""Implementation of the 'check' command.

Verifies that the pending release records changes, as done right before
a release.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from nextver.cli.commands.common import load_lifecycle
from nextver.exceptions import NextverError

if TYPE_CHECKING:
    from rich.console import Console


def run_check(path: str | None, console: Console, err_console: Console) -> None:
    lifecycle = load_lifecycle(path, err_console)

    try:
        lifecycle.munge_files()
        lifecycle.before_release()
    except NextverError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"[green]✓[/] {lifecycle.config.change_file} has changes for the next version")
