"""Tests for the JSON camera record store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cm_app.services.camera_store import CameraRecord, CameraStore
from cm_common.errors import StoreError


pytestmark = pytest.mark.unit_app


def _record(camera_id: str, created_at: int, **extra) -> CameraRecord:
    return CameraRecord(
        id=camera_id,
        display_name=f"Camera {camera_id}",
        csv_content="menu\nA\n",
        css_file_name=camera_id,
        created_at=created_at,
        **extra,
    )


def test_put_get_and_creation_order(store: CameraStore) -> None:
    store.put(_record("b", 20))
    store.put(_record("a", 10, brand="Acme", icon_data="AAAA"))

    assert [record.id for record in store.all()] == ["a", "b"]
    loaded = store.get("a")
    assert loaded == _record("a", 10, brand="Acme", icon_data="AAAA")
    assert store.get("missing") is None


def test_records_are_saved_with_camel_case_keys(store: CameraStore) -> None:
    store.put(_record("a", 10, model="Z1"))
    data = json.loads(store.path.read_text())
    assert data["version"] == 1
    assert data["cameras"] == [
        {
            "id": "a",
            "displayName": "Camera a",
            "model": "Z1",
            "csvContent": "menu\nA\n",
            "cssContent": "",
            "cssFileName": "a",
            "createdAt": 10,
        }
    ]


def test_records_parse_from_camel_case_payload() -> None:
    record = CameraRecord.model_validate(
        {
            "id": "x",
            "displayName": "X",
            "csvContent": "menu\n",
            "cssFileName": "x",
            "iconData": "AAAA",
            "createdAt": 5,
        }
    )
    assert record.icon_data == "AAAA"
    assert record.to_payload()["iconData"] == "AAAA"


def test_delete_reports_whether_anything_was_removed(store: CameraStore) -> None:
    store.put(_record("a", 1))
    assert store.delete("a") is True
    assert store.delete("a") is False
    assert store.all() == []


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    assert CameraStore(tmp_path / "nope.json").all() == []


@pytest.mark.parametrize("content", ["{not json", '{"cameras": [{"id": 1}]}', "[]"])
def test_unreadable_store_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "cameras.json"
    path.write_text(content)
    with pytest.raises(StoreError):
        CameraStore(path).all()


def test_write_failure_raises_store_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    store = CameraStore(blocker / "cameras.json")
    with pytest.raises(StoreError, match="could not be written"):
        store.put(_record("a", 1))


def test_failed_replace_leaves_no_temp_file(tmp_path: Path, monkeypatch) -> None:
    store = CameraStore(tmp_path / "cameras.json")

    def refuse(src, dst):
        raise PermissionError("read-only")

    monkeypatch.setattr("cm_app.services.camera_store.os.replace", refuse)
    with pytest.raises(StoreError, match="could not be written"):
        store.put(_record("a", 1))
    assert list(tmp_path.iterdir()) == []
