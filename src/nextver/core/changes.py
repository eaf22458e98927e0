"""Reading and rewriting ``Changes`` files.

The format is the one used by CPAN-style ``Changes`` files::

    Revision history for Foo

    {{$NEXT}}

      [API CHANGES]
      - Dropped the legacy entry point.

      [BUG FIXES]
      - Fixed the frobnicator.

    0.0.1 2024-01-01
      - Initial release.

Release headers start in the first column with a dotted version (or the pending
release token), group headers are bracketed labels and items start with a
dash or star. Items listed before any group header are "ungrouped" and are
reported under the empty group name.

The parser keeps every input line verbatim, so serializing an unmodified
changelog reproduces the original text byte for byte. Edits (deleting
groups, adding placeholder groups) only touch the lines they concern.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nextver.exceptions import ChangelogError, ChangelogIOError, ChangelogParseError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

NEXT_TOKEN = "{{$NEXT}}"

_GROUP_RE = re.compile(r"^\s*\[\s*(?P<name>.*?)\s*\]\s*$")
_ITEM_RE = re.compile(r"^\s*[-*+]\s+(?P<text>.*?)\s*$")
_INDENT_RE = re.compile(r"^(\s*)")
# At least two numeric components, so prose starting with a number is not a release
_VERSION_PATTERN = r"v?\d+(?:[._]\d+)+\S*"


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


@dataclass
class Group:
    """A block of lines inside a release.

    ``header`` is the raw ``[NAME]`` line; it is ``None`` for the ungrouped
    block sitting between the release header and the first group.
    """

    name: str
    header: str | None = None
    lines: list[str] = field(default_factory=list)

    @property
    def changes(self) -> list[str]:
        """Items of the group, continuation lines folded into their item."""
        items: list[str] = []
        for line in self.lines:
            text = line.strip()
            if not text:
                continue
            item = _ITEM_RE.match(_strip_eol(line))
            if item:
                items.append(item.group("text"))
            elif items:
                items[-1] = f"{items[-1]} {text}"
            else:
                items.append(text)
        return items

    def serialize(self) -> str:
        return (self.header or "") + "".join(self.lines)


@dataclass
class Release:
    """One release section of the changelog."""

    version: str
    header: str
    note: str | None = None
    is_next: bool = False
    lead: Group = field(default_factory=lambda: Group(""))
    named_groups: list[Group] = field(default_factory=list)
    indent: str = "  "
    newline: str = "\n"

    @property
    def groups(self) -> list[str]:
        """Group names in file order; ``""`` first when ungrouped items exist."""
        names = [group.name for group in self.named_groups]
        if self.lead.changes:
            names.insert(0, "")
        return names

    def _find(self, name: str) -> Group | None:
        if name == "":
            return self.lead
        for group in self.named_groups:
            if group.name == name:
                return group
        return None

    def changes(self, name: str = "") -> list[str]:
        group = self._find(name)
        return group.changes if group is not None else []

    @property
    def has_changes(self) -> bool:
        return any(self.changes(name) for name in self.groups)

    def delete_group(self, name: str) -> None:
        """Remove a group and its items.

        Blank lines trailing the removed block are handed to the previous
        block when it would otherwise run straight into the next release.
        """
        if name == "":
            self.lead.lines = [line for line in self.lead.lines if not line.strip()]
            return

        for index, group in enumerate(self.named_groups):
            if group.name == name:
                break
        else:
            return

        del self.named_groups[index]

        trailing: list[str] = []
        for line in reversed(group.lines):
            if line.strip():
                break
            trailing.insert(0, line)

        previous = self.named_groups[index - 1] if index > 0 else self.lead
        if trailing and (not previous.lines or previous.lines[-1].strip()):
            self._terminate(previous)
            previous.lines.extend(trailing)

    def delete_empty_groups(self) -> None:
        for name in [group.name for group in self.named_groups]:
            if not self.changes(name):
                self.delete_group(name)

    def add_groups(self, names: Iterable[str]) -> None:
        """Append an empty group for each name not already in the release."""
        existing = {group.name for group in self.named_groups}
        for name in names:
            if not name or name in existing:
                continue
            tail = self.named_groups[-1] if self.named_groups else self.lead
            self._terminate(tail)
            if not tail.lines or tail.lines[-1].strip():
                tail.lines.append(self.newline)
            self.named_groups.append(
                Group(name, header=f"{self.indent}[{name}]{self.newline}", lines=[self.newline])
            )
            existing.add(name)

    def _terminate(self, group: Group) -> None:
        # The last line of the file may lack its line ending.
        if group.lines:
            if not group.lines[-1].endswith("\n"):
                group.lines[-1] += self.newline
        elif group.header is not None:
            if not group.header.endswith("\n"):
                group.header += self.newline
        elif not self.header.endswith("\n"):
            self.header += self.newline

    def serialize(self) -> str:
        parts = [self.header, self.lead.serialize()]
        parts.extend(group.serialize() for group in self.named_groups)
        return "".join(parts)


class Changelog:
    """A parsed changelog: free-form preamble followed by releases."""

    def __init__(
        self,
        preamble: list[str] | None = None,
        releases: list[Release] | None = None,
    ) -> None:
        self.preamble = preamble or []
        # File order, newest release first.
        self._releases = releases or []

    @classmethod
    def parse(cls, text: str, next_token: str | re.Pattern[str] = NEXT_TOKEN) -> Changelog:
        """Parse changelog text.

        Args:
            text: Changelog content
            next_token: Literal token or compiled pattern naming the pending release

        Returns:
            Parsed changelog

        Raises:
            ChangelogParseError: If a release declares the same group twice
        """
        if isinstance(next_token, re.Pattern):
            token = next_token.pattern
        else:
            token = re.escape(next_token)

        header_re = re.compile(
            rf"^(?P<version>{token}|{_VERSION_PATTERN})(?:\s+(?P<note>.*?))?\s*$"
        )
        token_re = re.compile(rf"^(?:{token})$")

        lines = text.splitlines(keepends=True)
        newline = "\r\n" if lines and lines[0].endswith("\r\n") else "\n"
        indent = _detect_indent(lines)

        preamble: list[str] = []
        releases: list[Release] = []
        release: Release | None = None
        group: Group | None = None

        for lineno, line in enumerate(lines, start=1):
            body = _strip_eol(line)

            if body and not body[0].isspace():
                header = header_re.match(body)
                if header:
                    version = header.group("version")
                    release = Release(
                        version=version,
                        header=line,
                        note=header.group("note") or None,
                        is_next=bool(token_re.match(version)),
                        indent=indent,
                        newline=newline,
                    )
                    releases.append(release)
                    group = release.lead
                    continue

            if release is None or group is None:
                preamble.append(line)
                continue

            group_header = _GROUP_RE.match(body)
            if group_header:
                name = group_header.group("name")
                if not name:
                    raise ChangelogParseError(
                        f"empty group name in release {release.version}", line=lineno
                    )
                if any(existing.name == name for existing in release.named_groups):
                    raise ChangelogParseError(
                        f"duplicate group [{name}] in release {release.version}", line=lineno
                    )
                group = Group(name, header=line)
                release.named_groups.append(group)
                continue

            group.lines.append(line)

        return cls(preamble, releases)

    @classmethod
    def load(cls, path: Path, next_token: str | re.Pattern[str] = NEXT_TOKEN) -> Changelog:
        """Read and parse a changelog file, keeping its line endings."""
        return cls.parse(read_changelog(path), next_token)

    @property
    def releases(self) -> list[Release]:
        """Releases oldest first; the pending release comes last."""
        return list(reversed(self._releases))

    @property
    def next_release(self) -> Release:
        """The pending release.

        That is the release carrying the pending token or, when no release
        does, the most recent one.

        Raises:
            ChangelogError: If the changelog has no release at all
        """
        if not self._releases:
            raise ChangelogError("changelog has no release section")
        for release in self._releases:
            if release.is_next:
                return release
        logger.warning(
            "No pending release token in changelog, using release %s",
            self._releases[0].version,
        )
        return self._releases[0]

    def release(self, version: str) -> Release | None:
        for release in self._releases:
            if release.version == version:
                return release
        return None

    def stamp(
        self,
        version: str,
        note: str | None = None,
        next_token: str = NEXT_TOKEN,
    ) -> Release:
        """Record the pending release as ``version`` and open a new pending one.

        The pending header is rewritten to ``version`` followed by ``note``
        (usually the release date), and a fresh ``next_token`` header is
        inserted above it.

        Returns:
            The release that was stamped

        Raises:
            ChangelogError: If there is no pending release or ``version`` is
                already listed
        """
        index = next((i for i, r in enumerate(self._releases) if r.is_next), None)
        if index is None:
            raise ChangelogError("changelog has no pending release to stamp")
        if self.release(version) is not None:
            raise ChangelogError(f"release {version} is already in the changelog")

        pending = self._releases[index]
        newline = pending.newline
        pending.version = version
        pending.note = note
        pending.is_next = False
        pending.header = f"{version} {note}{newline}" if note else f"{version}{newline}"

        fresh = Release(
            version=next_token,
            header=f"{next_token}{newline}",
            is_next=True,
            lead=Group("", lines=[newline]),
            indent=pending.indent,
            newline=newline,
        )
        self._releases.insert(index, fresh)
        return pending

    def delete_empty_groups(self) -> None:
        for release in self._releases:
            release.delete_empty_groups()

    def serialize(self) -> str:
        return "".join(self.preamble) + "".join(release.serialize() for release in self._releases)

    def __str__(self) -> str:
        return self.serialize()


def read_changelog(path: Path) -> str:
    """Read a UTF-8 changelog file without translating its line endings.

    Raises:
        ChangelogIOError: If the file cannot be read
        ChangelogParseError: If the file is not valid UTF-8
    """
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except OSError as e:
        raise ChangelogIOError(f"can't read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ChangelogParseError(f"invalid UTF-8 in {path}: {e}") from e


def _detect_indent(lines: list[str]) -> str:
    for line in lines:
        if _GROUP_RE.match(_strip_eol(line)):
            indent = _INDENT_RE.match(line)
            if indent and indent.group(1):
                return indent.group(1)
    return "  "
