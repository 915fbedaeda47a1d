"""Menu model engine: parse, navigate, search and edit camera menus."""

from cm_menu.api import MenuDocument, MenuNode, SelectionPath, TreeEditor, load_document, search

__all__ = ["MenuDocument", "MenuNode", "SelectionPath", "TreeEditor", "load_document", "search"]
