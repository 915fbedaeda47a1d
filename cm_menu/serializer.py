"""Serialize a menu tree back into menu rows."""

from __future__ import annotations

from cm_menu.models import MenuNode, check_depth


def serialize(tree: MenuNode, *, keep_icons: bool = False) -> list[list[str]]:
    """Emit one row per node in pre-order; each row is the node's full path.

    Categories get their own row before their children. Icon tags are
    stripped unless ``keep_icons`` is set, and help text is never written,
    so a rebuilt tree matches ``tree`` only up to icons and help.
    """
    rows: list[list[str]] = []
    _emit(tree, [], rows, keep_icons, 0)
    return rows


def _emit(
    node: MenuNode,
    prefix: list[str],
    rows: list[list[str]],
    keep_icons: bool,
    depth: int,
) -> None:
    check_depth(depth)
    for child in node.iter_children():
        path = [*prefix, child.raw_key if keep_icons else child.label]
        rows.append(path)
        if child.children:
            _emit(child, path, rows, keep_icons, depth + 1)
