"""Previous version providers.

A provider answers one question: what was the last released version? It
returns ``None`` when it cannot tell, letting the next provider in line
answer instead.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from nextver.core.changes import NEXT_TOKEN, Changelog
from nextver.exceptions import (
    ChangelogError,
    ConfigNotFoundError,
    PreviousVersionNotFoundError,
    ProviderConfigurationError,
    VersionNotFoundError,
)
from nextver.project.pyproject import get_pyproject_version

if TYPE_CHECKING:
    import re
    from collections.abc import Sequence
    from pathlib import Path

    from nextver.config.models import NextVersionConfig
    from nextver.project.distribution import Distribution

logger = logging.getLogger(__name__)


@runtime_checkable
class PreviousVersionProvider(Protocol):
    """Anything able to report the previously released version."""

    def provide_previous_version(self) -> str | None: ...


class ChangelogVersionProvider:
    """Latest released version listed in the changelog.

    The pending release is skipped. The changelog is read from the
    distribution's in-memory files the first time it is needed.
    """

    def __init__(
        self,
        distribution: Distribution,
        filename: str = "Changes",
        next_token: str | re.Pattern[str] = NEXT_TOKEN,
    ) -> None:
        self.distribution = distribution
        self.filename = filename
        self.next_token = next_token

    @cached_property
    def changelog(self) -> Changelog:
        content = self.distribution.get_file(self.filename)
        if content is None:
            raise ChangelogError(f"changelog '{self.filename}' not found")
        return Changelog.parse(content, self.next_token)

    def provide_previous_version(self) -> str | None:
        for release in reversed(self.changelog.releases):
            if not release.is_next:
                return release.version
        return None


class PyprojectVersionProvider:
    """Version currently declared in the project's own pyproject.toml.

    Only ``root / "pyproject.toml"`` is consulted, never a parent project's.
    """

    def __init__(self, root: Path) -> None:
        self.path = root / "pyproject.toml"

    def provide_previous_version(self) -> str | None:
        try:
            return get_pyproject_version(self.path)
        except (ConfigNotFoundError, VersionNotFoundError) as e:
            logger.debug("No version from pyproject.toml: %s", e)
            return None


def build_providers(
    config: NextVersionConfig,
    distribution: Distribution,
) -> list[PreviousVersionProvider]:
    """Instantiate the providers named in ``config.previous_version``, in order."""
    providers: list[PreviousVersionProvider] = []
    for name in config.previous_version:
        if name == "changelog":
            providers.append(
                ChangelogVersionProvider(distribution, config.change_file, config.next_token)
            )
        elif name == "pyproject":
            providers.append(PyprojectVersionProvider(distribution.root))
    return providers


def resolve_previous_version(providers: Sequence[PreviousVersionProvider]) -> str:
    """Ask each provider in turn and return the first version found.

    Raises:
        ProviderConfigurationError: If no provider is registered
        PreviousVersionNotFoundError: If no provider knows the version
    """
    if not providers:
        raise ProviderConfigurationError("at least one PreviousVersionProvider is required")

    for provider in providers:
        version = provider.provide_previous_version()
        if version is not None:
            logger.debug("Previous version %s from %s", version, type(provider).__name__)
            return version

    raise PreviousVersionNotFoundError("no previous version found")
