"""Project files: the in-memory distribution and pyproject.toml."""
