"""Configuration block: camera metadata rows after the sentinel row."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from cm_menu.models import CONFIG_SENTINEL, CameraConfig
from cm_menu.rows import decode_rows, encode_row

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = frozenset({"brand", "model", "display_name", "css_file"})

# Legacy icon rows carry a fixed five character prefix before the name.
_LEGACY_ICON_PREFIX_LEN = 5


def parse_icon_row(row: Sequence[str]) -> Optional[tuple[str, str]]:
    """Return ``(name, value)`` for an icon row, or None when unusable."""
    head = row[0]
    second = row[1] if len(row) > 1 else None

    if head.startswith("icon:"):
        colon = head.index(":")
        comma = head.find(",")
        if comma != -1:
            name = head[colon + 1 : comma]
            value = second if second is not None else head[comma + 1 :]
        elif second is not None:
            name = head[colon + 1 :]
            value = second
        else:
            return None
    else:
        comma = head.find(",")
        if comma != -1:
            name = head[_LEGACY_ICON_PREFIX_LEN:comma]
            value = second or head[comma + 1 :]
        elif second is not None:
            name = head[_LEGACY_ICON_PREFIX_LEN:]
            value = second
        else:
            return None

    if not name:
        return None
    return name, value


def resolve_config(
    config_rows: Sequence[Sequence[str]],
    document_id: str | None = None,
) -> CameraConfig:
    """Read camera metadata from configuration rows.

    Rows with an unknown discriminator are ignored. When ``document_id`` is
    given, missing fields are derived through :meth:`CameraConfig.resolved`.
    """
    values: dict[str, object] = {}
    icons: dict[str, str] = {}
    for row in config_rows:
        if not row:
            continue
        head = row[0]
        if head in _SCALAR_FIELDS:
            if len(row) > 1:
                values[head] = row[1].strip()
            continue
        if head.startswith("icon"):
            parsed = parse_icon_row(row)
            if parsed is None:
                logger.debug("Ignoring icon row without a usable name: %r", head)
                continue
            name, value = parsed
            icons[name] = value

    config = CameraConfig(icons=icons, **values)
    if document_id is None:
        return config
    return config.resolved(document_id)


def _first_cell(line: str) -> str:
    rows = decode_rows(line)
    if not rows or not rows[0]:
        return ""
    return rows[0][0]


def _find_sentinel_line(lines: list[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        if _first_cell(line) == CONFIG_SENTINEL:
            return index
    return None


def set_config_value(
    text: str,
    key: str,
    value: str,
    *,
    after: str | None = None,
    at_end: bool = False,
) -> str:
    """Upsert ``key,value`` in the configuration block of a document.

    Lines before the sentinel are left untouched. An existing ``key,`` line
    is replaced in place; otherwise the line goes after the ``after`` key's
    line when present, else at the start (or end) of the block. A document
    without a sentinel gets one appended.
    """
    new_line = encode_row([key, value])
    lines = text.split("\n")
    sentinel = _find_sentinel_line(lines)
    if sentinel is None:
        return f"{text.rstrip()}\n{CONFIG_SENTINEL},\n{new_line}\n"

    start = sentinel + 1
    prefix = f"{key},"
    for index in range(start, len(lines)):
        if lines[index].startswith(prefix):
            ending = "\r" if lines[index].endswith("\r") else ""
            lines[index] = new_line + ending
            return "\n".join(lines)

    insert_at = start
    if after is not None:
        anchor = f"{after},"
        for index in range(start, len(lines)):
            if lines[index].startswith(anchor):
                insert_at = index + 1
                break
        else:
            insert_at = _block_end(lines, start) if at_end else start
    elif at_end:
        insert_at = _block_end(lines, start)
    lines.insert(insert_at, new_line)
    return "\n".join(lines)


def _block_end(lines: list[str], start: int) -> int:
    end = start
    for index in range(start, len(lines)):
        if lines[index].strip():
            end = index + 1
    return end
