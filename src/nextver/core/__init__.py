"""Core business logic for nextver.

This module contains the fundamental building blocks:
- Version parsing and manipulation (x.y.z with an x.yyyzzz numeric form)
- Change categories per version tier
- Changes file parsing and rewriting
- Bump decision from the pending release's groups

Previous version providers and the release lifecycle live in
``nextver.core.providers`` and ``nextver.core.lifecycle``.
"""

from __future__ import annotations

from nextver.core.bump import calculate_bump, next_version
from nextver.core.categories import ChangeCategories
from nextver.core.changes import NEXT_TOKEN, Changelog, Group, Release
from nextver.core.version import BumpType, Version, parse_version

__all__ = [
    "NEXT_TOKEN",
    "BumpType",
    "ChangeCategories",
    "Changelog",
    "Group",
    "Release",
    "Version",
    "calculate_bump",
    "next_version",
    "parse_version",
]
