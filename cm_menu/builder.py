"""Fold decoded menu rows into an ordered menu tree and help map."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from cm_common.errors import MenuDepthError
from cm_menu.help_column import detect_help_column
from cm_menu.models import (
    CONFIG_SENTINEL,
    MAX_MENU_DEPTH,
    MenuNode,
    join_help_path,
    strip_icon_tags,
)

logger = logging.getLogger(__name__)

HelpMap = dict[str, str]


def partition_rows(
    rows: Sequence[Sequence[str]],
) -> tuple[list[list[str]], list[list[str]]]:
    """Split document rows into menu rows and configuration rows.

    The first row is a header and belongs to neither part. The sentinel row
    itself is dropped.
    """
    sentinel = find_sentinel(rows)
    if sentinel is None:
        return [list(row) for row in rows[1:]], []
    return (
        [list(row) for row in rows[1:sentinel]],
        [list(row) for row in rows[sentinel + 1 :]],
    )


def find_sentinel(rows: Sequence[Sequence[str]]) -> Optional[int]:
    for index, row in enumerate(rows):
        if row and row[0] == CONFIG_SENTINEL:
            return index
    return None


def fill_carry_forward(
    row: Sequence[str],
    previous: Sequence[str],
    help_column: Optional[int],
) -> list[str]:
    """Copy ditto'd cells from the previous row.

    A blank cell is replaced by the previous row's value at the same column
    when a later cell (left of the help column) is filled in.
    """
    cells = list(row)
    if not previous:
        return cells
    limit = help_column if help_column is not None else len(cells)
    for index in range(min(limit, len(cells))):
        if cells[index].strip():
            continue
        if not any(cell.strip() for cell in cells[index + 1 : limit]):
            continue
        if index < len(previous) and previous[index].strip():
            cells[index] = previous[index]
    return cells


def insert_path(root: MenuNode, cells: Sequence[str], *, line: int | None = None) -> None:
    """Insert one comma path into the tree by recursive descent.

    An empty or whitespace-only segment ends the row; nothing is created for
    it or for anything to its right.
    """
    segments = list(cells)
    if segments:
        segments[0] = segments[0].lstrip()
        segments[-1] = segments[-1].rstrip()
    _descend(root, segments, 0, line)


def _descend(node: MenuNode, segments: list[str], depth: int, line: int | None) -> None:
    if not segments:
        return
    segment = segments[0]
    if not segment.strip():
        return
    if depth >= MAX_MENU_DEPTH:
        raise MenuDepthError(
            f"Menu row nests deeper than {MAX_MENU_DEPTH} levels",
            context={"line": line, "segment": segment},
        )
    child = node.ensure_child(segment)
    _descend(child, segments[1:], depth + 1, line)


def insert_help_path(
    root: MenuNode,
    cells: Sequence[str],
    help_text: str,
    help_map: HelpMap,
    *,
    line: int | None = None,
) -> None:
    """Create the full path named by ``cells`` and record its help text."""
    keys = [cell.strip() for cell in cells if cell.strip()]
    if not keys:
        return
    if len(keys) > MAX_MENU_DEPTH:
        raise MenuDepthError(
            f"Menu row nests deeper than {MAX_MENU_DEPTH} levels",
            context={"line": line, "depth": len(keys)},
        )
    node = root
    for key in keys:
        node = node.ensure_child(key)
    help_map[join_help_path([strip_icon_tags(key) for key in keys])] = help_text


def build_tree(menu_rows: Sequence[Sequence[str]]) -> tuple[MenuNode, HelpMap]:
    """Build the menu tree and help map from menu rows (header excluded).

    Rows are applied strictly in order and that order is the display order.
    A zero-cell row or the sentinel row stops processing.
    """
    root = MenuNode()
    help_map: HelpMap = {}
    help_column = detect_help_column(menu_rows)
    previous: list[str] = []

    for offset, row in enumerate(menu_rows):
        # +2: one for the header row, one for 1-based numbering.
        line = offset + 2
        if not row or row[0] == CONFIG_SENTINEL:
            break

        cells = fill_carry_forward(row, previous, help_column)
        path_cells = cells
        help_text = ""
        if help_column is not None and help_column < len(cells):
            help_text = cells[help_column].strip()
            if help_text:
                path_cells = cells[:help_column]

        if any(cell.strip() for cell in path_cells):
            if help_text:
                insert_help_path(root, path_cells, help_text, help_map, line=line)
            else:
                insert_path(root, path_cells, line=line)

        previous = cells

    logger.debug(
        "Built menu tree with %d top-level entries and %d help entries",
        len(root.children),
        len(help_map),
    )
    return root, help_map
