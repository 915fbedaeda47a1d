"""Environment variable parsing utilities."""

from __future__ import annotations

from pathlib import Path


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_path_env(value: str | None) -> Path | None:
    """Parse a filesystem path, expanding ``~``.

    Returns None if value is None or blank.
    """
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser()
