"""Shared error taxonomy for camera-menu-lib."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class CMError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class MenuParseError(CMError):
    """Failure while turning a menu document into a tree."""


class MenuDepthError(MenuParseError):
    """A menu path or tree exceeds the supported nesting depth."""


class MenuEditError(CMError):
    """A structural edit could not be applied to the working tree."""


class ArchiveError(CMError):
    """An imported or exported camera archive violates the bundle layout."""


class StoreError(CMError):
    """The camera record store could not be read or written."""


class ConfigurationError(CMError):
    """Failure due to invalid application settings."""


T = TypeVar("T", bound=CMError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed CMError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: CMError) -> dict[str, Any]:
    """Convert a CMError to a presenter/log payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
