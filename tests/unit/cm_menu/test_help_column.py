"""Tests for the help column heuristic."""

from __future__ import annotations

import pytest

from cm_menu.help_column import detect_help_column


pytestmark = pytest.mark.unit_menu


@pytest.mark.parametrize(
    "rows, expected",
    [
        ([["A", "B", "C"]], None),
        ([["A", "B"], ["", "C"]], None),
        ([["A", "B", "", "help"]], 3),
        ([["A", "B", "C", ""], ["", "", "D", "help"]], 3),
        ([["", "", ""], ["A", "", "x"]], 2),
        ([["A", " ", "x"]], 2),
        ([["camera_menu_config", "", "x"]], None),
        ([], None),
    ],
)
def test_detect_help_column(rows, expected) -> None:
    assert detect_help_column(rows) == expected


def test_first_qualifying_row_wins() -> None:
    rows = [["A", "", "help"], ["B", "C", "", "other"]]
    assert detect_help_column(rows) == 2
