"""Tests for the bump decision."""

from __future__ import annotations

import logging

import pytest

from nextver.core.bump import calculate_bump, next_version
from nextver.core.categories import ChangeCategories
from nextver.core.version import BumpType, Version


@pytest.fixture
def categories() -> ChangeCategories:
    return ChangeCategories()


class TestCalculateBump:
    """Tests for calculate_bump()."""

    @pytest.mark.parametrize(
        "groups",
        [
            ["BUG FIXES"],
            ["DOCUMENTATION"],
            ["BUG FIXES", "DOCUMENTATION"],
            ["SOMETHING ELSE"],
            ["BUG FIXES", "UNKNOWN"],
        ],
    )
    def test_revision(self, categories: ChangeCategories, groups: list[str]):
        """Revision-tier or unrecognized groups give a revision bump."""
        assert calculate_bump(groups, categories) == BumpType.REVISION

    @pytest.mark.parametrize(
        "groups",
        [
            ["API CHANGES"],
            ["API CHANGES", "ENHANCEMENTS"],
            ["BUG FIXES", "API CHANGES", ""],
            ["", "ENHANCEMENTS", "DOCUMENTATION", "API CHANGES"],
        ],
    )
    def test_major_wins(self, categories: ChangeCategories, groups: list[str]):
        """Any major group gives a major bump whatever else is present."""
        assert calculate_bump(groups, categories) == BumpType.MAJOR

    def test_minor(self, categories: ChangeCategories):
        assert calculate_bump(["ENHANCEMENTS", "BUG FIXES"], categories) == BumpType.MINOR

    def test_ungrouped_is_minor(self, categories: ChangeCategories):
        """Ungrouped changes alone count as minor."""
        assert calculate_bump([""], categories) == BumpType.MINOR

    def test_exact_labels(self, categories: ChangeCategories):
        """Labels must match exactly."""
        assert calculate_bump(["api changes", "Enhancements"], categories) == BumpType.REVISION

    def test_custom_categories(self):
        categories = ChangeCategories(major="MAJOR, BREAKING", minor="MINOR", revision="FIXES")

        assert calculate_bump(["BREAKING"], categories) == BumpType.MAJOR
        assert calculate_bump(["MINOR"], categories) == BumpType.MINOR
        assert calculate_bump(["API CHANGES"], categories) == BumpType.REVISION

    def test_logs_first_configured_major_label(self, caplog: pytest.LogCaptureFixture):
        """The first configured major label found is reported."""
        categories = ChangeCategories(major="B, A")

        with caplog.at_level(logging.DEBUG, logger="nextver.core.bump"):
            calculate_bump(["A", "B"], categories)

        assert "B change detected, major increase" in caplog.text

    def test_logs_general_for_ungrouped(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG, logger="nextver.core.bump"):
            calculate_bump([""], ChangeCategories())

        assert "general change detected, minor increase" in caplog.text


class TestNextVersion:
    """Tests for next_version()."""

    def test_ungrouped_from_revision(self, categories: ChangeCategories):
        assert str(next_version("0.0.1", [""], categories)) == "0.1.0"

    def test_api_changes(self, categories: ChangeCategories):
        assert str(next_version("0.1.0", ["API CHANGES"], categories)) == "1.0.0"

    def test_documentation(self, categories: ChangeCategories):
        assert next_version("1.0.1", ["DOCUMENTATION"], categories) == Version(1, 0, 2)

    def test_single_major_increment(self):
        """Several major groups still bump once."""
        categories = ChangeCategories(major="A, B")

        assert next_version(Version(1, 2, 3), ["A", "B"], categories) == Version(2, 0, 0)
