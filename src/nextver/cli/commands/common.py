"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from nextver.config import load_config
from nextver.core.lifecycle import ReleaseLifecycle
from nextver.core.providers import build_providers
from nextver.exceptions import NextverError
from nextver.project.distribution import Distribution

if TYPE_CHECKING:
    from rich.console import Console


def load_lifecycle(path: str | None, err_console: Console) -> ReleaseLifecycle:
    """Load configuration and change file, and wire up the release lifecycle.

    Args:
        path: Optional path to project directory
        err_console: Console for error output

    Raises:
        SystemExit: If the project cannot be loaded
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        distribution = Distribution.from_path(project_path, [config.change_file])
    except NextverError as e:
        err_console.print(f"[red]Error loading project:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    return ReleaseLifecycle(distribution, config, build_providers(config, distribution))
