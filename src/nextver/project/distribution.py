"""In-memory view of the project being released.

Build steps edit file contents in memory; only the after-release step
writes back to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nextver.exceptions import ParseError, ProjectError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


@dataclass
class Distribution:
    """Project root, in-memory file contents and the version slot."""

    root: Path
    files: dict[str, str] = field(default_factory=dict)
    version: str | None = None

    @classmethod
    def from_path(cls, root: Path, filenames: Iterable[str]) -> Distribution:
        """Load the given files (relative to ``root``) that exist on disk.

        Raises:
            ProjectError: If an existing file cannot be read
            ParseError: If a file is not valid UTF-8
        """
        files: dict[str, str] = {}
        for name in filenames:
            path = root / name
            if not path.is_file():
                continue
            try:
                with path.open(encoding="utf-8", newline="") as fh:
                    files[name] = fh.read()
            except OSError as e:
                raise ProjectError(f"can't read {path}: {e}") from e
            except UnicodeDecodeError as e:
                raise ParseError(f"invalid UTF-8 in {path}: {e}") from e
        return cls(root=root, files=files)

    def get_file(self, name: str) -> str | None:
        return self.files.get(name)

    def set_file(self, name: str, content: str) -> None:
        self.files[name] = content
