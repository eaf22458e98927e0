"""Tests for pyproject.toml version handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from nextver.exceptions import ProjectError, VersionNotFoundError
from nextver.project.pyproject import get_pyproject_version, update_pyproject_version

if TYPE_CHECKING:
    from pathlib import Path

POETRY = """\
[tool.poetry]
name = "foo"
version = '2.1.0'

[tool.poetry.dependencies]
python = "^3.11"
"""


class TestGetPyprojectVersion:
    """Tests for get_pyproject_version()."""

    def test_pep621(self, project_dir: Path):
        assert get_pyproject_version(project_dir) == "0.0.1"

    def test_file_path(self, project_dir: Path):
        assert get_pyproject_version(project_dir / "pyproject.toml") == "0.0.1"

    def test_poetry(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(POETRY)

        assert get_pyproject_version(tmp_path) == "2.1.0"

    def test_version_outside_project_table_ignored(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "foo"\n\n[tool.other]\nversion = "9.9.9"\n'
        )

        with pytest.raises(VersionNotFoundError):
            get_pyproject_version(tmp_path)


class TestUpdatePyprojectVersion:
    """Tests for update_pyproject_version()."""

    def test_update_preserves_formatting(self, project_dir: Path):
        """Only the version line changes."""
        path = update_pyproject_version(project_dir, "0.1.0")
        content = path.read_text()

        assert 'version = "0.1.0"' in content
        assert "# managed by nextver" in content
        assert "[tool.nextver]" in content
        assert get_pyproject_version(project_dir) == "0.1.0"

    def test_update_poetry(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(POETRY)
        update_pyproject_version(tmp_path, "2.2.0")

        content = (tmp_path / "pyproject.toml").read_text()
        assert 'version = "2.2.0"' in content
        assert 'python = "^3.11"' in content

    def test_update_same_version_raises(self, project_dir: Path):
        with pytest.raises(ProjectError, match="may already be 0.0.1"):
            update_pyproject_version(project_dir, "0.0.1")

    def test_update_without_version_raises(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "foo"\n')

        with pytest.raises(VersionNotFoundError):
            update_pyproject_version(tmp_path, "1.0.0")
