"""Tests for edit sessions over catalog documents."""

from __future__ import annotations

import pytest

from cm_app.services.catalog import CameraCatalog
from cm_app.services.edit_session import EditSession
from cm_common.errors import StoreError
from cm_menu.navigation import SelectionPath


pytestmark = pytest.mark.unit_app


def test_save_builtin_switches_session_to_custom_copy(catalog: CameraCatalog) -> None:
    session = EditSession(catalog, "example_camera", SelectionPath([4]))
    session.editor.rename_node((4,), "System")
    entry = session.save()

    assert entry.id != "example_camera"
    assert session.camera_id == entry.id
    assert session.document.document_id == entry.id
    labels = [child.label for child in session.document.tree.iter_children()]
    assert labels == ["Photo", "Exposure", "White Balance", "Video", "System"]
    assert session.document.tree.child_at(0).icon_name == "photo"
    assert session.document.config.icons.keys() == {"photo", "video"}
    assert not session.editor.dirty
    assert session.editor.selection.indices == [4]

    builtin = catalog.document("example_camera")
    assert builtin.tree.child_at(4).label == "Setup"


def test_saving_twice_keeps_custom_id(catalog: CameraCatalog) -> None:
    session = EditSession(catalog, "example_camera")
    session.editor.add_child(())
    first = session.save()
    session.editor.rename_node((5,), "Custom")
    second = session.save()
    assert second.id == first.id
    assert catalog.document(first.id).tree.child_at(5).label == "Custom"


def test_store_failure_keeps_working_copy(catalog: CameraCatalog, monkeypatch) -> None:
    session = EditSession(catalog, "example_camera")
    editor = session.editor
    editor.rename_node((0,), "Stills")

    def _fail(record):
        raise StoreError("disk full")

    monkeypatch.setattr(catalog.store, "put", _fail)
    with pytest.raises(StoreError):
        session.save()

    assert session.editor is editor
    assert editor.dirty
    assert session.camera_id == "example_camera"
    assert catalog.document("example_camera").tree.child_at(0).label == "Photo"


def test_cancel_discards_working_copy(catalog: CameraCatalog) -> None:
    session = EditSession(catalog, "example_camera")
    session.editor.delete_node((0,))
    session.cancel()
    assert not session.active
    assert catalog.document("example_camera").tree.child_at(0).label == "Photo"
    with pytest.raises(RuntimeError):
        session.save()
