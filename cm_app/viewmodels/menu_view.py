"""Presentation state for browsing one camera menu."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from cm_menu.api import (
    MenuDocument,
    MenuLevel,
    MenuNode,
    SearchMatch,
    SelectionPath,
    breadcrumb,
    node_at,
    search,
    visible_levels,
)


@dataclass
class MenuViewModel:
    """Selection, search query and help mode over a single ``MenuDocument``.

    Frontends render ``levels()`` as columns and forward key presses to
    ``select``/``back``; nothing here knows about terminals.
    """

    document: MenuDocument
    selection: SelectionPath = field(default_factory=SelectionPath)
    query: str = ""
    help_mode: bool = False

    @property
    def tree(self) -> MenuNode:
        return self.document.tree

    def levels(self) -> list[MenuLevel]:
        return visible_levels(self.tree, self.selection.indices)

    def breadcrumb(self) -> list[str]:
        return breadcrumb(self.tree, self.selection.indices)

    def selected_node(self) -> Optional[MenuNode]:
        if not self.selection.indices:
            return None
        return node_at(self.tree, self.selection.indices)

    def select(self, level: int, index: int) -> None:
        self.selection.select(level, index)

    def back(self) -> None:
        self.selection.back()

    def set_query(self, query: str) -> None:
        self.query = query

    def search_results(self) -> list[SearchMatch]:
        return search(self.tree, self.query.strip())

    def jump_to_match(self, match: SearchMatch) -> None:
        """Select ``match`` and leave search."""
        self.selection.jump_to(match.path_indices)
        self.query = ""

    def toggle_help(self) -> bool:
        self.help_mode = not self.help_mode
        return self.help_mode

    def help_for_selected(self) -> Optional[str]:
        if not self.selection.indices:
            return None
        if self.selected_node() is None:
            return None
        return self.document.help_for(self.breadcrumb())

    def switch_document(self, document: MenuDocument) -> None:
        """Show another camera; the selection starts over."""
        self.document = document
        self.selection = SelectionPath()
        self.query = ""
