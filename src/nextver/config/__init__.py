"""Configuration management for nextver."""

from __future__ import annotations

from nextver.config.loader import load_config
from nextver.config.models import NextVersionConfig

__all__ = [
    "NextVersionConfig",
    "load_config",
]
