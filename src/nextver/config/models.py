"""Configuration models.

The configuration lives in the ``[tool.nextver]`` table of pyproject.toml::

    [tool.nextver]
    change_file = "Changes"
    numify_version = false
    major = "API CHANGES"
    minor = "ENHANCEMENTS"
    revision = ["BUG FIXES", "DOCUMENTATION"]
    previous_version = ["changelog", "pyproject"]
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from nextver.core.categories import (
    DEFAULT_MAJOR,
    DEFAULT_MINOR,
    DEFAULT_REVISION,
    CategoryList,
    ChangeCategories,
)
from nextver.core.changes import NEXT_TOKEN

ProviderName = Literal["changelog", "pyproject"]


class NextVersionConfig(BaseModel):
    """Settings shared by every lifecycle step of one release."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    change_file: str = Field(default="Changes", description="Changelog file name")
    numify_version: bool = Field(
        default=False,
        description="Produce x.yyyzzz numeric versions instead of x.y.z",
    )
    major: CategoryList = Field(default=DEFAULT_MAJOR)
    minor: CategoryList = Field(default=DEFAULT_MINOR)
    revision: CategoryList = Field(default=DEFAULT_REVISION)
    next_token: str = Field(default=NEXT_TOKEN, description="Pending release token")
    version_env: str = Field(
        default="V",
        description="Environment variable overriding the computed version",
    )
    previous_version: tuple[ProviderName, ...] = Field(
        default=("changelog",),
        description="Previous version providers, tried in order",
    )

    @property
    def categories(self) -> ChangeCategories:
        return ChangeCategories(major=self.major, minor=self.minor, revision=self.revision)
