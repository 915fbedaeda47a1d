"""Public API surface for cm_common."""

from cm_common.errors import (
    ArchiveError,
    CMError,
    ConfigurationError,
    MenuDepthError,
    MenuEditError,
    MenuParseError,
    StoreError,
    error_to_payload,
    wrap_error,
)
from cm_common.logging import configure_logging

__all__ = [
    "ArchiveError",
    "CMError",
    "ConfigurationError",
    "MenuDepthError",
    "MenuEditError",
    "MenuParseError",
    "StoreError",
    "configure_logging",
    "error_to_payload",
    "wrap_error",
]
