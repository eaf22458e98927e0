"""Change categories mapped to version tiers.

Each tier (major, minor, revision) owns an ordered list of changelog group
labels. Configuration usually arrives as free text, so a tier also accepts a
single comma-separated string::

    major = "API CHANGES, BREAKING"
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from nextver.core.version import BumpType

_SEPARATOR_RE = re.compile(r"\s*,\s*")

DEFAULT_MAJOR = ("API CHANGES",)
DEFAULT_MINOR = ("ENHANCEMENTS",)
DEFAULT_REVISION = ("BUG FIXES", "DOCUMENTATION")


def split_categories(value: Any) -> Any:
    """Split a comma-separated string into labels; other values pass through."""
    if isinstance(value, str):
        return [label for label in _SEPARATOR_RE.split(value.strip()) if label]
    return value


CategoryList = Annotated[tuple[str, ...], BeforeValidator(split_categories)]


class ChangeCategories(BaseModel):
    """Group labels for each version tier.

    Labels are compared with exact string equality. Their order only matters
    when the placeholder groups of a fresh pending release are written.
    """

    model_config = ConfigDict(frozen=True)

    major: CategoryList = Field(default=DEFAULT_MAJOR)
    minor: CategoryList = Field(default=DEFAULT_MINOR)
    revision: CategoryList = Field(default=DEFAULT_REVISION)

    def labels(self, tier: BumpType) -> tuple[str, ...]:
        """Labels configured for a tier."""
        return getattr(self, tier.value)

    def contains(self, tier: BumpType, label: str) -> bool:
        return label in self.labels(tier)

    def all_labels(self) -> list[tuple[BumpType, str]]:
        """All ``(tier, label)`` pairs, major first, then minor, then revision."""
        return [
            (tier, label)
            for tier in (BumpType.MAJOR, BumpType.MINOR, BumpType.REVISION)
            for label in self.labels(tier)
        ]
