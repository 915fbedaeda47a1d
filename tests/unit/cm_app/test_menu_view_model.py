"""Tests for the menu browsing view model."""

from __future__ import annotations

import pytest

from cm_app.viewmodels.menu_view import MenuViewModel
from cm_menu.document import MenuDocument, load_document


pytestmark = pytest.mark.unit_app


@pytest.fixture
def view(catalog) -> MenuViewModel:
    return MenuViewModel(catalog.document("example_camera"))


def test_select_and_back_drive_levels(view: MenuViewModel) -> None:
    assert len(view.levels()) == 1
    view.select(0, 0)
    view.select(1, 0)
    assert [level.depth for level in view.levels()] == [0, 1, 2]
    assert view.breadcrumb() == ["Photo", "Image Quality"]
    view.back()
    assert view.breadcrumb() == ["Photo"]


def test_help_for_selected(view: MenuViewModel) -> None:
    assert view.help_for_selected() is None
    view.selection.jump_to([0, 0, 0])
    assert view.help_for_selected() == "Store unprocessed sensor data"
    view.selection.jump_to([0, 0, 2])
    assert view.help_for_selected() is None
    assert view.toggle_help() is True
    assert view.help_mode


def test_search_and_jump(view: MenuViewModel) -> None:
    view.set_query("iso")
    matches = view.search_results()
    assert [match.breadcrumb for match in matches] == [("Exposure", "ISO")]
    view.jump_to_match(matches[0])
    assert view.selection.indices == [1, 0]
    assert view.query == ""
    assert view.search_results() == []


def test_switch_document_resets_state(view: MenuViewModel, sample_csv) -> None:
    view.select(0, 1)
    view.set_query("x")
    other = load_document("acme_z1", sample_csv)
    view.switch_document(other)
    assert view.document is other
    assert view.selection.indices == []
    assert view.query == ""


def test_empty_document_has_no_levels() -> None:
    view = MenuViewModel(MenuDocument.empty("none"))
    assert view.levels() == []
    assert view.selected_node() is None
