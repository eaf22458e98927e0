"""Implementation of the 'next' command.

The next command computes the upcoming version from the changelog and,
with --execute, writes it into pyproject.toml.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from nextver.cli.commands.common import load_lifecycle
from nextver.exceptions import NextverError
from nextver.project.pyproject import update_pyproject_version

if TYPE_CHECKING:
    from rich.console import Console


def run_next(
    path: str | None,
    execute: bool,
    quiet: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the next command.

    Args:
        path: Optional path to project directory
        execute: Whether to write the version into pyproject.toml
        quiet: Print the bare version only
        console: Console for standard output
        err_console: Console for error output
    """
    lifecycle = load_lifecycle(path, err_console)

    try:
        lifecycle.munge_files()
        next_version = lifecycle.provide_version()
    except NextverError as e:
        err_console.print(f"[red]Error computing version:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if quiet and not execute:
        console.print(next_version, highlight=False)
        return

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    console.print(f"\n{mode_str} - Next version is [green]{next_version}[/]\n")

    if not execute:
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n"
                "  • Update version in [cyan]pyproject.toml[/]",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    try:
        update_pyproject_version(lifecycle.distribution.root, next_version)
    except NextverError as e:
        err_console.print(f"[red]Error updating pyproject.toml:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print("  [green]✓[/] Updated version in pyproject.toml")
