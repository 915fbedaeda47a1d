"""Presenters for camera menus and the camera catalog."""

from __future__ import annotations

from typing import Sequence

from rich.markup import escape
from rich.tree import Tree

from cm_app.api import CameraCatalog
from cm_menu.api import MenuDocument, MenuLevel, MenuNode, SearchMatch, check_depth
from cm_ui.tui.core import theme
from cm_ui.tui.system.models import TableModel


def format_path(indices: Sequence[int]) -> str:
    """Render selection indices the way the CLI accepts them (``0.2.1``)."""
    return ".".join(str(index) for index in indices)


def build_catalog_table(catalog: CameraCatalog) -> TableModel:
    rows: list[list[str]] = []
    for brand, entries in catalog.grouped_by_brand().items():
        for entry in entries:
            source = "built-in" if entry.builtin else "custom"
            rows.append([escape(brand), escape(entry.label), entry.id, source])
    return TableModel(
        title="Cameras",
        columns=["Brand", "Camera", "ID", "Source"],
        rows=rows,
    )


def _label_markup(node: MenuNode, help_text: str | None) -> str:
    text = f"{theme.node_marker(node.is_leaf)} {escape(node.label)}"
    if node.icon_name:
        text += f" [{theme.ICON_STYLE}]({node.icon_name})[/{theme.ICON_STYLE}]"
    if help_text:
        text += f" [{theme.HELP_STYLE}]- {escape(help_text)}[/{theme.HELP_STYLE}]"
    return text


def build_menu_tree(document: MenuDocument, *, show_help: bool = False) -> Tree:
    """Build a Rich tree of the whole menu, optionally annotated with help text."""
    title = document.config.display_name or document.document_id
    tree = Tree(theme.panel_title(escape(title)))

    def _add(branch: Tree, node: MenuNode, labels: tuple[str, ...], depth: int) -> None:
        check_depth(depth, context={"document": document.document_id})
        for child in node.iter_children():
            path = (*labels, child.label)
            help_text = document.help_for(path) if show_help else None
            _add(branch.add(_label_markup(child, help_text)), child, path, depth + 1)

    _add(tree, document.tree, (), 0)
    return tree


def build_levels_table(levels: Sequence[MenuLevel]) -> TableModel:
    """One column per visible menu level, the selected entry highlighted."""
    height = max((len(level.nodes) for level in levels), default=0)
    rows: list[list[str]] = []
    for row_index in range(height):
        row = []
        for level in levels:
            if row_index >= len(level.nodes):
                row.append("")
                continue
            node = level.nodes[row_index]
            cell = f"{theme.node_marker(node.is_leaf)} {escape(node.label)}"
            if row_index == level.selected_index:
                cell = f"[reverse]{cell}[/reverse]"
            row.append(cell)
        rows.append(row)
    return TableModel(
        title="Menu",
        columns=[f"Level {level.depth}" for level in levels],
        rows=rows,
    )


def build_search_table(query: str, matches: Sequence[SearchMatch]) -> TableModel:
    rows = [
        [format_path(match.path_indices), escape(" > ".join(match.breadcrumb))]
        for match in matches
    ]
    return TableModel(
        title=f"Matches for {query!r}",
        columns=["Path", "Location"],
        rows=rows,
    )
