"""Full-tree substring search over menu labels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from cm_menu.models import MenuNode, check_depth


@dataclass(frozen=True)
class SearchMatch:
    node: MenuNode
    ancestor_labels: tuple[str, ...]
    path_indices: tuple[int, ...]

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def breadcrumb(self) -> tuple[str, ...]:
        return (*self.ancestor_labels, self.node.label)


def iter_search(
    tree: MenuNode,
    query: str,
    case_insensitive: bool = True,
) -> Iterator[SearchMatch]:
    """Yield every node whose label contains ``query``, in document order.

    Categories are tested like leaves and always descended into. An empty
    query matches nothing.
    """
    if not query:
        return
    needle = query.lower() if case_insensitive else query
    yield from _walk(tree, needle, case_insensitive, (), (), 0)


def _walk(
    node: MenuNode,
    needle: str,
    case_insensitive: bool,
    labels: tuple[str, ...],
    indices: tuple[int, ...],
    depth: int,
) -> Iterator[SearchMatch]:
    check_depth(depth)
    for position, child in enumerate(node.iter_children()):
        label = child.label
        haystack = label.lower() if case_insensitive else label
        path = (*indices, position)
        if needle in haystack:
            yield SearchMatch(child, labels, path)
        if child.children:
            yield from _walk(child, needle, case_insensitive, (*labels, label), path, depth + 1)


def search(tree: MenuNode, query: str, case_insensitive: bool = True) -> list[SearchMatch]:
    return list(iter_search(tree, query, case_insensitive))
