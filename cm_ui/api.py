"""Stable UI API surface."""

from __future__ import annotations

from cm_ui.cli import app, ctx_store, main
from cm_ui.presenters.menu import (
    build_catalog_table,
    build_levels_table,
    build_menu_tree,
    build_search_table,
)
from cm_ui.tui.system.facade import TUI
from cm_ui.tui.system.headless import HeadlessUI
from cm_ui.tui.system.models import TableModel
from cm_ui.wiring.dependencies import UIContext

__all__ = [
    "app",
    "main",
    "ctx_store",
    "build_catalog_table",
    "build_levels_table",
    "build_menu_tree",
    "build_search_table",
    "HeadlessUI",
    "TUI",
    "TableModel",
    "UIContext",
]
