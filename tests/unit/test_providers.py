"""Tests for previous version providers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from nextver.config.models import NextVersionConfig
from nextver.core.providers import (
    ChangelogVersionProvider,
    PreviousVersionProvider,
    PyprojectVersionProvider,
    build_providers,
    resolve_previous_version,
)
from nextver.exceptions import (
    ChangelogError,
    PreviousVersionNotFoundError,
    ProviderConfigurationError,
)
from nextver.project.distribution import Distribution

if TYPE_CHECKING:
    from pathlib import Path


class TestChangelogVersionProvider:
    """Tests for ChangelogVersionProvider."""

    def test_latest_release_skips_pending(self, tmp_path: Path):
        dist = Distribution(
            root=tmp_path,
            files={"Changes": "{{$NEXT}}\n  - a\n\n0.2.0 2024-02-01\n  - b\n\n0.1.0\n  - c\n"},
        )

        assert ChangelogVersionProvider(dist).provide_previous_version() == "0.2.0"

    def test_without_pending_token(self, tmp_path: Path):
        dist = Distribution(root=tmp_path, files={"Changes": "0.2.0\n  - b\n\n0.1.0\n  - c\n"})

        assert ChangelogVersionProvider(dist).provide_previous_version() == "0.2.0"

    def test_no_released_version(self, tmp_path: Path):
        dist = Distribution(root=tmp_path, files={"Changes": "{{$NEXT}}\n  - a\n"})

        assert ChangelogVersionProvider(dist).provide_previous_version() is None

    def test_custom_filename(self, tmp_path: Path):
        dist = Distribution(root=tmp_path, files={"CHANGES.txt": "{{$NEXT}}\n\n1.0.0\n"})

        provider = ChangelogVersionProvider(dist, filename="CHANGES.txt")
        assert provider.provide_previous_version() == "1.0.0"

    def test_missing_changelog(self, tmp_path: Path):
        provider = ChangelogVersionProvider(Distribution(root=tmp_path))

        with pytest.raises(ChangelogError, match="changelog 'Changes' not found"):
            provider.provide_previous_version()

    def test_is_provider(self, tmp_path: Path):
        assert isinstance(
            ChangelogVersionProvider(Distribution(root=tmp_path)), PreviousVersionProvider
        )


class TestPyprojectVersionProvider:
    """Tests for PyprojectVersionProvider."""

    def test_version_from_pyproject(self, project_dir: Path):
        assert PyprojectVersionProvider(project_dir).provide_previous_version() == "0.0.1"

    def test_no_version(self, tmp_path: Path):
        """A pyproject.toml without version gives no answer."""
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'foo'\n")

        assert PyprojectVersionProvider(tmp_path).provide_previous_version() is None

    def test_parent_project_ignored(self, project_dir: Path):
        """A parent directory's pyproject.toml does not answer for the project."""
        subproject = project_dir / "sub"
        subproject.mkdir()

        assert PyprojectVersionProvider(subproject).provide_previous_version() is None


class TestResolvePreviousVersion:
    """Tests for resolve_previous_version()."""

    def test_no_provider(self):
        with pytest.raises(ProviderConfigurationError, match="PreviousVersionProvider"):
            resolve_previous_version([])

    def test_all_providers_empty(self, make_provider):
        with pytest.raises(PreviousVersionNotFoundError, match="no previous version"):
            resolve_previous_version([make_provider(None), make_provider(None)])

    def test_first_answer_wins(self, make_provider):
        """Providers are tried in order and the first answer is kept."""
        first, second, third = make_provider(None), make_provider("1.2.3"), make_provider("9.9.9")

        assert resolve_previous_version([first, second, third]) == "1.2.3"
        assert first.calls == 1
        assert third.calls == 0


class TestBuildProviders:
    """Tests for build_providers()."""

    def test_default(self, tmp_path: Path):
        providers = build_providers(NextVersionConfig(), Distribution(root=tmp_path))

        assert len(providers) == 1
        assert isinstance(providers[0], ChangelogVersionProvider)

    def test_order_follows_config(self, tmp_path: Path):
        config = NextVersionConfig(previous_version=["pyproject", "changelog"])
        providers = build_providers(config, Distribution(root=tmp_path))

        assert [type(p) for p in providers] == [PyprojectVersionProvider, ChangelogVersionProvider]

    def test_changelog_settings(self, tmp_path: Path):
        config = NextVersionConfig(change_file="CHANGES.md", next_token="UNRELEASED")
        (provider,) = build_providers(config, Distribution(root=tmp_path))

        assert provider.filename == "CHANGES.md"
        assert provider.next_token == "UNRELEASED"

    def test_none(self, tmp_path: Path):
        config = NextVersionConfig(previous_version=[])

        assert build_providers(config, Distribution(root=tmp_path)) == []
