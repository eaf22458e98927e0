"""Loading configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nextver.config.models import NextVersionConfig
from nextver.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_NAME = "nextver"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file is missing
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_nextver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.nextver] table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> NextVersionConfig:
    """Load the configuration for the project at ``path``.

    Defaults are used when there is no pyproject.toml or no
    [tool.nextver] table.

    Raises:
        ConfigValidationError: If the table holds invalid settings
    """
    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using default configuration")
        return NextVersionConfig()

    data = extract_nextver_config(load_pyproject_toml(pyproject_path))
    try:
        return NextVersionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] in {pyproject_path}:\n{e}") from e
