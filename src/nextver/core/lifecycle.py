"""Release lifecycle hooks.

The release host calls the hooks in this order:

* :meth:`ReleaseLifecycle.munge_files` at build time drops the empty groups
  of the pending release from the in-memory changelog;
* :meth:`ReleaseLifecycle.provide_version` computes the new version, or takes
  it verbatim from the override environment variable;
* :meth:`ReleaseLifecycle.before_release` refuses to release when the pending
  release records no change;
* :meth:`ReleaseLifecycle.after_release` rewrites the changelog on disk with
  a placeholder group for every configured category.

Hosts that do not stamp the released version into the changelog themselves
call :meth:`ReleaseLifecycle.stamp_release` just before ``after_release``.

Every failure raises; edits already applied are not rolled back.
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum
from functools import cached_property
from typing import TYPE_CHECKING

from nextver.core import bump
from nextver.core.changes import Changelog
from nextver.core.providers import resolve_previous_version
from nextver.exceptions import (
    ChangelogError,
    ChangelogIOError,
    EmptyChangesError,
    MissingDataError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import date
    from pathlib import Path

    from nextver.config.models import NextVersionConfig
    from nextver.core.providers import PreviousVersionProvider
    from nextver.project.distribution import Distribution

logger = logging.getLogger(__name__)


class LifecycleState(StrEnum):
    IDLE = "idle"
    MUNGED = "munged"
    VALIDATED = "validated"
    VERSIONED = "versioned"
    FINALIZED = "finalized"


class ReleaseLifecycle:
    """Drives one release of a distribution.

    Args:
        distribution: Project being released
        config: Release configuration
        providers: Previous version providers, tried in order
        environ: Environment to look the override variable up in
            (defaults to ``os.environ``)
    """

    def __init__(
        self,
        distribution: Distribution,
        config: NextVersionConfig,
        providers: Sequence[PreviousVersionProvider],
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.distribution = distribution
        self.config = config
        self.providers = list(providers)
        self.environ = os.environ if environ is None else environ
        self.state = LifecycleState.IDLE

    def _transition(self, expected: LifecycleState, new: LifecycleState) -> None:
        if self.state is not expected:
            logger.warning("%s step run while %s (expected %s)", new, self.state, expected)
        self.state = new

    def _load_in_memory(self) -> Changelog:
        content = self.distribution.get_file(self.config.change_file)
        if content is None:
            raise ChangelogError(f"changelog '{self.config.change_file}' not found")
        return Changelog.parse(content, self.config.next_token)

    @property
    def change_path(self) -> Path:
        return self.distribution.root / self.config.change_file

    def munge_files(self) -> None:
        """Remove empty groups from the pending release, in memory."""
        name = self.config.change_file
        if self.distribution.get_file(name) is None:
            return

        changes = self._load_in_memory()
        changes.next_release.delete_empty_groups()

        logger.debug("updating contents of %s in memory", name)
        self.distribution.set_file(name, changes.serialize())
        self._transition(LifecycleState.IDLE, LifecycleState.MUNGED)

    @cached_property
    def previous_version(self) -> str:
        return resolve_previous_version(self.providers)

    def provide_version(self) -> str:
        """Compute the next version and store it in the distribution."""
        override = self.environ.get(self.config.version_env)
        if override is not None:
            logger.info("Using version %s from $%s", override, self.config.version_env)
            version = override
        else:
            version = self.next_version(self.previous_version)

        self.distribution.version = version
        if self.state is LifecycleState.VALIDATED:
            self.state = LifecycleState.VERSIONED
        return version

    def next_version(self, last_version: str) -> str:
        """Bump ``last_version`` according to the pending release's groups."""
        pending = self._load_in_memory().next_release
        groups = [group for group in pending.groups if pending.changes(group)]

        new_version = bump.next_version(last_version, groups, self.config.categories)
        result = str(new_version.numify() if self.config.numify_version else new_version)

        logger.info("Bumping version from %s to %s", last_version, result)
        return result

    def before_release(self) -> None:
        """Fail unless the pending release records at least one change."""
        pending = self._load_in_memory().next_release
        if not pending.has_changes:
            raise EmptyChangesError("change file has no content for next version")
        self._transition(LifecycleState.MUNGED, LifecycleState.VALIDATED)

    def stamp_release(self, version: str | None, released_on: date) -> bool:
        """Record the pending release on disk as ``version``, dated ``released_on``.

        A fresh pending release header is opened above it. Nothing is written
        when the pending release records no change, which is the case once
        another tool has already stamped it.

        Returns:
            Whether the change file was rewritten

        Raises:
            MissingDataError: If there are changes to record but no version
        """
        path = self.change_path
        changes = Changelog.load(path, self.config.next_token)

        pending = changes.next_release
        if not pending.is_next or not pending.has_changes:
            logger.debug("no pending changes to stamp in %s", path)
            return False
        if not version:
            raise MissingDataError(f"no released version to record in {path}")

        changes.stamp(version, released_on.isoformat(), self.config.next_token)
        _write_changelog(path, changes.serialize())
        logger.info("Recorded release %s in %s", version, path)
        return True

    def after_release(self) -> None:
        """Rewrite the changelog on disk with fresh placeholder groups."""
        path = self.change_path
        changes = Changelog.load(path, self.config.next_token)

        changes.delete_empty_groups()
        changes.next_release.add_groups(label for _, label in self.config.categories.all_labels())

        logger.debug("updating contents of %s on disk", path)
        _write_changelog(path, changes.serialize())

        if self.state is not LifecycleState.VERSIONED:
            logger.debug("after-release step run while %s", self.state)
        self.state = LifecycleState.FINALIZED


def _write_changelog(path: Path, content: str) -> None:
    try:
        fh = path.open("w", encoding="utf-8", newline="")
    except OSError as e:
        raise ChangelogIOError(f"can't open {path} for writing: {e}") from e

    try:
        with fh:
            fh.write(content)
    except OSError as e:
        raise ChangelogIOError(f"error writing {path}: {e}") from e
