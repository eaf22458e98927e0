"""Three-part version numbers.

Versions are ``major.minor.revision`` triples. Bumping a tier increments
that component and resets the lower ones, so ``0.0.1`` bumped at the minor
tier gives ``0.1.0``.

A version can also be projected onto a single decimal number using the
``x.yyyzzz`` convention (``1.2.3`` -> ``1.002003``) for consumers that
expect numeric versions. :meth:`Version.parse` reads that form back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import StrEnum

from nextver.exceptions import VersionParseError

_DOTTED_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?$")
_NUMIFIED_RE = re.compile(r"^v?(\d+)\.(\d{4,})$")


class BumpType(StrEnum):
    """Version tier to increment."""

    MAJOR = "major"
    MINOR = "minor"
    REVISION = "revision"


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """An immutable ``major.minor.revision`` version."""

    major: int = 0
    minor: int = 0
    revision: int = 0

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.revision) < 0:
            raise VersionParseError(f"Version components must be non-negative: {self!r}")

    @classmethod
    def parse(cls, version: str) -> Version:
        """Parse a dotted (``1.2.3``) or numified (``1.002003``) version.

        Missing components default to zero, so ``"1"`` parses as ``1.0.0``.

        Args:
            version: Version string

        Returns:
            Parsed version

        Raises:
            VersionParseError: If the string is not a version
        """
        text = version.strip()

        numified = _NUMIFIED_RE.match(text)
        if numified:
            fraction = numified.group(2)
            # Right-pad to whole 3-digit groups: 1.0021 -> 1.002100
            fraction = fraction.ljust(-(-len(fraction) // 3) * 3, "0")
            groups = [int(fraction[i : i + 3]) for i in range(0, len(fraction), 3)]
            if len(groups) > 2:
                raise VersionParseError(f"Too many components in version: {version!r}")
            return cls(int(numified.group(1)), *groups)

        dotted = _DOTTED_RE.match(text)
        if not dotted:
            raise VersionParseError(f"Invalid version: {version!r}")

        return cls(*(int(part) if part else 0 for part in dotted.groups()))

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version incremented at the given tier."""
        if bump_type is BumpType.MAJOR:
            return self.increment_major()
        if bump_type is BumpType.MINOR:
            return self.increment_minor()
        return self.increment_revision()

    def increment_major(self) -> Version:
        return Version(self.major + 1, 0, 0)

    def increment_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def increment_revision(self) -> Version:
        return replace(self, revision=self.revision + 1)

    def numify(self) -> Decimal:
        """Project the version onto a decimal number (``1.2.3`` -> ``1.002003``)."""
        return Decimal(f"{self.major}.{self.minor:03d}{self.revision:03d}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.revision}"


def parse_version(version: str | Version) -> Version:
    """Coerce a string or a version into a :class:`Version`."""
    if isinstance(version, Version):
        return version
    return Version.parse(version)
