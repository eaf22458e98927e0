"""Exception hierarchy for nextver.

Every error raised by the library derives from :class:`NextverError` so
callers (the CLI in particular) can catch a single type. None of these
errors are retryable: they point at a configuration or changelog problem
that a human has to fix.
"""

from __future__ import annotations


class NextverError(Exception):
    """Base class for all nextver errors."""


# Configuration


class ConfigError(NextverError):
    """Configuration is missing or unusable."""


class ConfigNotFoundError(ConfigError):
    """pyproject.toml could not be found or read."""


class ConfigValidationError(ConfigError):
    """The [tool.nextver] table failed validation."""


class ProviderConfigurationError(ConfigError):
    """No previous version provider is registered."""


# Missing data


class MissingDataError(NextverError):
    """Data required to compute a release is absent."""


class PreviousVersionNotFoundError(MissingDataError):
    """Every provider returned no previous version."""


class EmptyChangesError(MissingDataError):
    """The pending release has no recorded change."""


# Parsing


class ParseError(NextverError):
    """Malformed input text."""


class VersionParseError(ParseError):
    """A version string does not have the x.y.z shape."""


class ChangelogParseError(ParseError):
    """The changelog text violates the format."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


# Changelog


class ChangelogError(NextverError):
    """The changelog cannot be used."""


class ChangelogIOError(ChangelogError):
    """Reading or rewriting the changelog on disk failed."""


# Project files


class ProjectError(NextverError):
    """A project file could not be handled."""


class VersionNotFoundError(ProjectError):
    """No version declaration was found in a project file."""
