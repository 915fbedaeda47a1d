"""Structural edits on a working copy of a menu tree."""

from __future__ import annotations

import logging
from typing import Sequence

from cm_common.errors import MenuEditError
from cm_menu.models import MenuNode, icon_tags_of
from cm_menu.navigation import SelectionPath, node_at
from cm_menu.serializer import serialize

logger = logging.getLogger(__name__)

PLACEHOLDER_LABEL = "New Item"

Path = tuple[int, ...]


def _unique_key(parent: MenuNode, base: str) -> str:
    if base not in parent.children:
        return base
    suffix = 2
    while f"{base} {suffix}" in parent.children:
        suffix += 1
    return f"{base} {suffix}"


class TreeEditor:
    """Apply edits to a clone of ``tree``; the original is never touched.

    The editor owns its own ``SelectionPath`` and repairs it after every
    structural change so it keeps pointing at live nodes.
    """

    def __init__(self, tree: MenuNode, selection: SelectionPath | None = None) -> None:
        self._tree = tree.clone()
        self.selection = selection.copy() if selection is not None else SelectionPath()
        self.dirty = False

    @property
    def tree(self) -> MenuNode:
        return self._tree

    def node_at(self, path: Sequence[int]) -> MenuNode:
        node = node_at(self._tree, path)
        if node is None:
            raise MenuEditError(
                "Path does not address a node in the working tree",
                context={"path": list(path)},
            )
        return node

    def _parent_and_index(self, path: Sequence[int]) -> tuple[MenuNode, int]:
        if not path:
            raise MenuEditError("The menu root cannot be renamed or deleted")
        parent = self.node_at(path[:-1])
        index = path[-1]
        if parent.child_at(index) is None:
            raise MenuEditError(
                "Path does not address a node in the working tree",
                context={"path": list(path)},
            )
        return parent, index

    def rename_node(self, path: Sequence[int], new_label: str) -> None:
        """Relabel a node in place, keeping its icon tag, position and children.

        An empty label deletes the node instead.
        """
        if not new_label.strip():
            self.delete_node(path)
            return
        parent, index = self._parent_and_index(path)
        node = parent.child_at(index)
        assert node is not None
        if new_label == node.label:
            return
        label = new_label.strip()
        new_key = icon_tags_of(node.raw_key) + label
        if new_key == node.raw_key:
            return
        if new_key in parent.children:
            raise MenuEditError(
                f"A sibling named {label!r} already exists",
                context={"path": list(path), "label": label},
            )
        parent.rekey_child(index, new_key)
        self.dirty = True
        logger.debug("Renamed node at %s to %r", list(path), label)

    def add_child(self, path: Sequence[int] = ()) -> Path:
        """Append a placeholder child under ``path`` and select it."""
        parent = self.node_at(path)
        index = parent.append_child(MenuNode(_unique_key(parent, PLACEHOLDER_LABEL)))
        new_path = (*path, index)
        self.selection.jump_to(new_path)
        self.dirty = True
        return new_path

    def add_sibling(self, level: int | None = None) -> Path:
        """Append a placeholder next to the selected node at ``level``.

        ``level`` defaults to the deepest selected level. With nothing
        selected the placeholder becomes a new top-level entry.
        """
        indices = self.selection.indices
        if level is None:
            level = len(indices) - 1
        if level < 0:
            return self.add_child(())
        if level >= len(indices):
            raise MenuEditError(
                "No node is selected at the requested level",
                context={"level": level, "selection": list(indices)},
            )
        parent_path = tuple(indices[:level])
        parent = self.node_at(parent_path)
        index = parent.append_child(MenuNode(_unique_key(parent, PLACEHOLDER_LABEL)))
        self.selection.select(level, index)
        self.dirty = True
        return (*parent_path, index)

    def delete_node(self, path: Sequence[int]) -> MenuNode:
        """Remove a node (and its subtree) and repair the selection."""
        parent, index = self._parent_and_index(path)
        removed = parent.remove_child_at(index)
        self._repair_selection(tuple(path[:-1]), index, parent)
        self.dirty = True
        logger.debug("Deleted node %r at %s", removed.label, list(path))
        return removed

    def _repair_selection(self, parent_path: Path, index: int, parent: MenuNode) -> None:
        indices = self.selection.indices
        level = len(parent_path)
        if len(indices) <= level or tuple(indices[:level]) != parent_path:
            return
        if not parent.children:
            self.selection.truncate(level)
            return
        selected = indices[level]
        if selected == index:
            self.selection.select(level, min(index, len(parent.children) - 1))
        elif selected > index:
            indices[level] = selected - 1

    def serialize(self, *, keep_icons: bool = False) -> list[list[str]]:
        return serialize(self._tree, keep_icons=keep_icons)
