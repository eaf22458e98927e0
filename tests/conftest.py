"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_CHANGES = """\
Revision history for Foo

{{$NEXT}}

  [API CHANGES]

  [BUG FIXES]
  - Fixed the frobnicator.
    It now frobs.

  [DOCUMENTATION]

0.0.1 2024-01-01
  - Initial release.
"""

SAMPLE_PYPROJECT = """\
[project]
name = "foo"
# managed by nextver
version = "0.0.1"

[tool.nextver]
change_file = "Changes"
previous_version = ["changelog", "pyproject"]
"""


class StaticProvider:
    """Previous version provider returning a fixed answer."""

    def __init__(self, version: str | None) -> None:
        self.version = version
        self.calls = 0

    def provide_previous_version(self) -> str | None:
        self.calls += 1
        return self.version


@pytest.fixture
def sample_changes() -> str:
    return SAMPLE_CHANGES


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with a pyproject.toml and a Changes file."""
    (tmp_path / "pyproject.toml").write_text(SAMPLE_PYPROJECT)
    (tmp_path / "Changes").write_text(SAMPLE_CHANGES)
    return tmp_path


@pytest.fixture
def make_provider() -> type[StaticProvider]:
    """Factory for previous version providers with a fixed answer."""
    return StaticProvider
