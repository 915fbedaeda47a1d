"""One parsed camera menu document: tree, metadata and help map together."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

from cm_menu.builder import build_tree, find_sentinel, partition_rows
from cm_menu.config_block import resolve_config
from cm_menu.models import CameraConfig, MenuNode, join_help_path
from cm_menu.rows import decode_rows, encode_rows
from cm_menu.serializer import serialize

logger = logging.getLogger(__name__)

DEFAULT_HEADER = ("menu",)


@dataclass(frozen=True)
class MenuDocument:
    """Tree, resolved camera config and help map built from one document.

    The bundle is replaced as a whole when another camera is selected;
    edits go through a cloned tree and produce a new document on save.
    """

    document_id: str
    tree: MenuNode = field(default_factory=MenuNode)
    config: CameraConfig = field(default_factory=CameraConfig)
    help_map: Mapping[str, str] = field(default_factory=dict)
    header: tuple[str, ...] = DEFAULT_HEADER
    trailer_rows: tuple[tuple[str, ...], ...] = ()

    @classmethod
    def empty(cls, document_id: str) -> "MenuDocument":
        return cls(document_id=document_id, config=CameraConfig().resolved(document_id))

    @property
    def is_empty(self) -> bool:
        return not self.tree.children

    def help_for(self, labels: Sequence[str]) -> str | None:
        return self.help_map.get(join_help_path(tuple(labels)))


def load_document(document_id: str, text: str | None) -> MenuDocument:
    """Parse ``text`` once into a MenuDocument.

    Missing or empty text degrades to an empty document so a stale camera
    selection still renders.
    """
    rows = decode_rows(text)
    if not rows:
        logger.info("No menu content for document %r; using an empty menu", document_id)
        return MenuDocument.empty(document_id)

    menu_rows, config_rows = partition_rows(rows)
    sentinel = find_sentinel(rows)
    trailer = rows[sentinel:] if sentinel is not None else []

    tree, help_map = build_tree(menu_rows)
    config = resolve_config(config_rows, document_id)
    return MenuDocument(
        document_id=document_id,
        tree=tree,
        config=config,
        help_map=MappingProxyType(help_map),
        header=tuple(rows[0]) or DEFAULT_HEADER,
        trailer_rows=tuple(tuple(row) for row in trailer),
    )


def render_document(
    document: MenuDocument,
    tree: MenuNode | None = None,
    *,
    keep_icons: bool = False,
) -> str:
    """Rebuild CSV text from a (possibly edited) tree.

    The header row and everything from the sentinel row on are written back
    unchanged; the menu rows come from :func:`serialize`.
    """
    rows: list[Sequence[str]] = [document.header]
    rows.extend(serialize(tree if tree is not None else document.tree, keep_icons=keep_icons))
    rows.extend(document.trailer_rows)
    return encode_rows(rows)
