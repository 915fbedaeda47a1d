"""Tests for shared error helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from cm_common.errors import (
    ArchiveError,
    CMError,
    MenuDepthError,
    MenuParseError,
    StoreError,
    error_to_payload,
    wrap_error,
)


pytestmark = pytest.mark.unit_common


def test_error_to_payload_normalizes_context() -> None:
    err = StoreError(
        "boom",
        context={
            "path": Path("/tmp/cameras.json"),
            "count": 3,
            "nested": {"value": Path("nested")},
            "items": [Path("a"), "b"],
        },
    )
    payload = error_to_payload(err)
    assert payload["error_type"] == "StoreError"
    assert payload["error"] == "boom"
    assert payload["error_context"]["path"].endswith("cameras.json")
    assert payload["error_context"]["count"] == 3
    assert payload["error_context"]["nested"]["value"] == "nested"
    assert payload["error_context"]["items"] == ["a", "b"]


def test_wrap_error_keeps_cause() -> None:
    cause = ValueError("bad zip")
    err = wrap_error(ArchiveError, "invalid archive", context={"name": "x.zip"}, cause=cause)
    assert isinstance(err, ArchiveError)
    assert err.__cause__ is cause
    assert err.to_dict() == {
        "type": "ArchiveError",
        "message": "invalid archive",
        "context": {"name": "x.zip"},
    }


def test_depth_error_is_a_parse_error() -> None:
    err = MenuDepthError("too deep", context={"line": 7})
    assert isinstance(err, MenuParseError)
    assert isinstance(err, CMError)
    assert err.context == {"line": 7}
