"""Public API surface for the menu model engine."""

from cm_menu.builder import build_tree, fill_carry_forward, insert_path, partition_rows
from cm_menu.config_block import parse_icon_row, resolve_config, set_config_value
from cm_menu.document import MenuDocument, load_document, render_document
from cm_menu.editor import PLACEHOLDER_LABEL, TreeEditor
from cm_menu.help_column import detect_help_column
from cm_menu.models import (
    CONFIG_SENTINEL,
    HELP_PATH_SEPARATOR,
    MAX_MENU_DEPTH,
    CameraConfig,
    MenuNode,
    check_depth,
    icon_name_of,
    strip_icon_tags,
)
from cm_menu.navigation import (
    MenuLevel,
    SelectionPath,
    breadcrumb,
    node_at,
    resolve_chain,
    visible_levels,
)
from cm_menu.rows import decode_rows, encode_row, encode_rows
from cm_menu.search import SearchMatch, iter_search, search
from cm_menu.serializer import serialize

__all__ = [
    "CONFIG_SENTINEL",
    "HELP_PATH_SEPARATOR",
    "MAX_MENU_DEPTH",
    "PLACEHOLDER_LABEL",
    "CameraConfig",
    "MenuDocument",
    "MenuLevel",
    "MenuNode",
    "SearchMatch",
    "SelectionPath",
    "TreeEditor",
    "breadcrumb",
    "build_tree",
    "check_depth",
    "decode_rows",
    "detect_help_column",
    "encode_row",
    "encode_rows",
    "fill_carry_forward",
    "icon_name_of",
    "insert_path",
    "iter_search",
    "load_document",
    "node_at",
    "parse_icon_row",
    "partition_rows",
    "render_document",
    "resolve_chain",
    "resolve_config",
    "search",
    "serialize",
    "set_config_value",
    "strip_icon_tags",
    "visible_levels",
]
