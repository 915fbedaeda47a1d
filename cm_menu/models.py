"""Menu tree and camera metadata models."""

from __future__ import annotations

import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional

from pydantic import BaseModel, Field

from cm_common.errors import MenuDepthError

CONFIG_SENTINEL = "camera_menu_config"
HELP_PATH_SEPARATOR = " > "
MAX_MENU_DEPTH = 64

ICON_TAG_RE = re.compile(r'<i name="([^"]+)"/>')


def strip_icon_tags(text: str) -> str:
    """Return ``text`` with every inline icon tag removed."""
    return ICON_TAG_RE.sub("", text)


def icon_name_of(text: str) -> Optional[str]:
    match = ICON_TAG_RE.search(text)
    return match.group(1) if match else None


def icon_tags_of(text: str) -> str:
    """Return the icon tags embedded in ``text``, concatenated in order."""
    return "".join(match.group(0) for match in ICON_TAG_RE.finditer(text))


def join_help_path(labels: list[str] | tuple[str, ...]) -> str:
    return HELP_PATH_SEPARATOR.join(labels)


def check_depth(depth: int, *, context: Mapping[str, object] | None = None) -> None:
    """Raise MenuDepthError when ``depth`` exceeds MAX_MENU_DEPTH."""
    if depth > MAX_MENU_DEPTH:
        raise MenuDepthError(
            f"Menu nesting exceeds the maximum depth of {MAX_MENU_DEPTH}",
            context={"depth": depth, **(context or {})},
        )


@dataclass
class MenuNode:
    """A named menu entry; leaves are settable items, the rest are categories.

    ``children`` is keyed by the child's raw key (icon tag included) and keeps
    first-insertion order, which is the on-screen order of the menu. Equality
    is order-sensitive because both sides hold an ``OrderedDict``.
    """

    raw_key: str = ""
    children: "OrderedDict[str, MenuNode]" = field(default_factory=OrderedDict)

    @property
    def label(self) -> str:
        return strip_icon_tags(self.raw_key)

    @property
    def icon_name(self) -> Optional[str]:
        return icon_name_of(self.raw_key)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __len__(self) -> int:
        return len(self.children)

    def iter_children(self) -> Iterator["MenuNode"]:
        return iter(self.children.values())

    def child_at(self, index: int) -> Optional["MenuNode"]:
        """Return the child at ``index`` or None when out of range."""
        if index < 0 or index >= len(self.children):
            return None
        for position, child in enumerate(self.children.values()):
            if position == index:
                return child
        return None

    def index_of(self, raw_key: str) -> int:
        for position, key in enumerate(self.children):
            if key == raw_key:
                return position
        return -1

    def ensure_child(self, raw_key: str) -> "MenuNode":
        """Return the child stored under ``raw_key``, appending it if missing."""
        child = self.children.get(raw_key)
        if child is None:
            child = MenuNode(raw_key)
            self.children[raw_key] = child
        return child

    def append_child(self, child: "MenuNode") -> int:
        self.children[child.raw_key] = child
        return len(self.children) - 1

    def rekey_child(self, index: int, new_raw_key: str) -> "MenuNode":
        """Change the key of the child at ``index`` without moving it."""
        items = list(self.children.items())
        _, child = items[index]
        child.raw_key = new_raw_key
        items[index] = (new_raw_key, child)
        self.children.clear()
        self.children.update(items)
        return child

    def remove_child_at(self, index: int) -> "MenuNode":
        key = list(self.children)[index]
        return self.children.pop(key)

    def clone(self, _depth: int = 0) -> "MenuNode":
        check_depth(_depth)
        copy = MenuNode(self.raw_key)
        for key, child in self.children.items():
            copy.children[key] = child.clone(_depth + 1)
        return copy


class CameraConfig(BaseModel):
    """Camera-level metadata read from the configuration block."""

    icons: Dict[str, str] = Field(
        default_factory=dict, description="Icon name -> base64 bitmap text"
    )
    brand: Optional[str] = Field(default=None, description="Camera brand")
    model: Optional[str] = Field(default=None, description="Camera model")
    display_name: Optional[str] = Field(default=None, description="Name shown in pickers")
    css_file: Optional[str] = Field(default=None, description="Stylesheet name without extension")

    def resolved(self, document_id: str) -> "CameraConfig":
        """Return a copy with brand, model, display name and stylesheet filled in.

        Without a brand, the display name (or ``document_id``) is split on the
        first space into brand and model. Without a display name, one is
        synthesized from brand and model. The stylesheet defaults to the
        document id.
        """
        brand = self.brand or None
        model = self.model
        if not brand:
            source = self.display_name or document_id
            if " " in source:
                brand, model = source.split(" ", 1)
            else:
                brand, model = source, ""
        model = model or ""
        display_name = self.display_name or f"{brand} {model}".strip()
        return self.model_copy(
            update={
                "brand": brand,
                "model": model,
                "display_name": display_name,
                "css_file": self.css_file or document_id,
            }
        )
