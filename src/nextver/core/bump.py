"""Deciding the version bump from changelog groups.

The decision is a strict three-way classification with the precedence
major > minor > revision:

1. any group labelled with a major category triggers a major bump;
2. otherwise ungrouped items or any minor category trigger a minor bump;
3. anything else is a revision bump.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nextver.core.version import BumpType, Version, parse_version

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nextver.core.categories import ChangeCategories

logger = logging.getLogger(__name__)


def calculate_bump(groups: Iterable[str], categories: ChangeCategories) -> BumpType:
    """Classify a release from the names of its non-empty groups.

    Args:
        groups: Names of the groups holding at least one change; ``""``
            stands for ungrouped changes
        categories: Labels of each tier

    Returns:
        The tier to bump
    """
    present = set(groups)

    for label in categories.major:
        if label in present:
            logger.debug("%s change detected, major increase", label)
            return BumpType.MAJOR

    for label in ("", *categories.minor):
        if label in present:
            logger.debug("%s change detected, minor increase", label or "general")
            return BumpType.MINOR

    logger.debug("revision increase")
    return BumpType.REVISION


def next_version(
    previous: str | Version,
    groups: Iterable[str],
    categories: ChangeCategories,
) -> Version:
    """Apply the bump decided by :func:`calculate_bump` to ``previous``."""
    return parse_version(previous).bump(calculate_bump(groups, categories))
