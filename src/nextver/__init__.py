"""nextver: compute the next version from a categorized changelog."""

from __future__ import annotations

__version__ = "0.1.0"
