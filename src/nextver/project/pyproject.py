"""pyproject.toml version manipulation.

This module reads and updates the version number in pyproject.toml.

It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from nextver.config.loader import find_pyproject_toml
from nextver.exceptions import ConfigNotFoundError, ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

# Tables that may carry the version, in lookup order
_VERSION_TABLES = ("project", "tool.poetry")

_VERSION_LINE_RE = re.compile(r'^(version\s*=\s*)["\']([^"\']+)["\']', re.MULTILINE)


def _resolve(path: Path | None) -> Path:
    if path is None:
        return find_pyproject_toml()
    if path.is_dir():
        return find_pyproject_toml(path)
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    return path


def _table_pattern(table: str) -> re.Pattern[str]:
    # The whole table, up to the next table header or EOF
    return re.compile(rf"^\[{re.escape(table)}\].*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def get_pyproject_version(path: Path | None = None) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml or directory to search from

    Returns:
        Version string

    Raises:
        ConfigNotFoundError: If pyproject.toml does not exist
        VersionNotFoundError: If version cannot be found
    """
    pyproject_path = _resolve(path)
    content = pyproject_path.read_text()

    for table in _VERSION_TABLES:
        section = _table_pattern(table).search(content)
        if section:
            match = _VERSION_LINE_RE.search(section.group(0))
            if match:
                return match.group(2)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path | None, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    Args:
        path: Path to pyproject.toml or directory containing it
        new_version: New version string to set

    Returns:
        Path to the updated pyproject.toml

    Raises:
        ConfigNotFoundError: If pyproject.toml does not exist
        VersionNotFoundError: If version cannot be found
        ProjectError: If the version is already ``new_version``
    """
    pyproject_path = _resolve(path)
    content = pyproject_path.read_text()

    def replace_version(match: re.Match[str]) -> str:
        return _VERSION_LINE_RE.sub(rf'\g<1>"{new_version}"', match.group(0), count=1)

    for table in _VERSION_TABLES:
        pattern = _table_pattern(table)
        section = pattern.search(content)
        if section and _VERSION_LINE_RE.search(section.group(0)):
            new_content = pattern.sub(replace_version, content, count=1)
            break
    else:
        raise VersionNotFoundError(
            f"Could not find version to update in {pyproject_path}. "
            "Expected [project].version or [tool.poetry].version."
        )

    if new_content == content:
        raise ProjectError(
            f"Version in {pyproject_path} was not updated. It may already be {new_version}."
        )

    pyproject_path.write_text(new_content)
    return pyproject_path
