"""Selection path state and the views derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from cm_menu.models import MAX_MENU_DEPTH, MenuNode


@dataclass
class SelectionPath:
    """One selected sibling index per depth; the complete navigation state."""

    indices: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self):
        return iter(self.indices)

    def select(self, level: int, index: int) -> None:
        """Select ``index`` at ``level`` and forget every deeper selection."""
        if level < 0 or index < 0:
            raise ValueError(f"Selection level and index must be >= 0 (got {level}, {index})")
        del self.indices[min(level, len(self.indices)) :]
        self.indices.append(index)

    def back(self) -> None:
        if self.indices:
            self.indices.pop()

    def truncate(self, length: int) -> None:
        del self.indices[max(length, 0) :]

    def jump_to(self, indices: Iterable[int]) -> None:
        """Replace the path by replaying ``select`` once per level."""
        self.indices.clear()
        for level, index in enumerate(indices):
            self.select(level, index)

    def copy(self) -> "SelectionPath":
        return SelectionPath(list(self.indices))


@dataclass(frozen=True)
class MenuLevel:
    """One renderable column: the siblings at ``depth`` and which one is selected."""

    depth: int
    nodes: tuple[MenuNode, ...]
    selected_index: int | None = None

    @property
    def selected(self) -> MenuNode | None:
        if self.selected_index is None:
            return None
        return self.nodes[self.selected_index]


def resolve_chain(tree: MenuNode, indices: Sequence[int]) -> list[MenuNode]:
    """Return the selected node at each depth, stopping at the first bad index."""
    chain: list[MenuNode] = []
    node = tree
    for index in indices[:MAX_MENU_DEPTH]:
        child = node.child_at(index)
        if child is None:
            break
        chain.append(child)
        node = child
    return chain


def breadcrumb(tree: MenuNode, indices: Sequence[int]) -> list[str]:
    return [node.label for node in resolve_chain(tree, indices)]


def node_at(tree: MenuNode, indices: Sequence[int]) -> MenuNode | None:
    """Return the node addressed by ``indices`` (the root for an empty path)."""
    chain = resolve_chain(tree, indices)
    if len(chain) != len(indices):
        return None
    return chain[-1] if chain else tree


def visible_levels(tree: MenuNode, indices: Sequence[int]) -> list[MenuLevel]:
    """Return the columns to draw for the current selection.

    The root's children are always the first column. A further column is shown
    while the selection at the previous depth is valid and is a category.
    """
    levels: list[MenuLevel] = []
    node = tree
    depth = 0
    while node.children and depth <= MAX_MENU_DEPTH:
        selected: int | None = indices[depth] if depth < len(indices) else None
        if selected is not None and node.child_at(selected) is None:
            selected = None
        levels.append(MenuLevel(depth, tuple(node.children.values()), selected))
        if selected is None:
            break
        node = node.child_at(selected)  # type: ignore[assignment]
        depth += 1
    return levels
