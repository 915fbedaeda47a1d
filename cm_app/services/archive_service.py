"""Import and export camera bundles as zip archives.

A bundle holds exactly one menu CSV, exactly one stylesheet and at most one
PNG picker icon. Export adds one PNG per ``icon:`` entry of the
configuration block.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import random
import string
import time
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Callable, Optional, Union

from cm_common.errors import ArchiveError
from cm_menu.api import (
    decode_rows,
    parse_icon_row,
    partition_rows,
    resolve_config,
    set_config_value,
)
from cm_app.services.camera_store import CameraRecord

logger = logging.getLogger(__name__)

ArchiveSource = Union[Path, str, bytes, BinaryIO]

_IGNORED_PREFIX = "__MACOSX/"


@dataclass
class ArchiveContents:
    csv_content: str
    css_content: str
    csv_file_name: str
    css_file_name: str
    icon_data: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    display_name: Optional[str] = None


def _open_zip(source: ArchiveSource) -> zipfile.ZipFile:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    try:
        return zipfile.ZipFile(source)
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveError("File is not a readable zip archive", cause=exc)


def _pick_single(names: list[str], suffix: str, kind: str) -> str:
    if not names:
        raise ArchiveError(
            f"No {kind} file found in zip",
            context={"requirement": f"one {suffix} file", "found": 0},
        )
    if len(names) > 1:
        raise ArchiveError(
            f"Multiple {kind} files found in zip. Please include only one {kind} file.",
            context={"requirement": f"one {suffix} file", "found": names},
        )
    return names[0]


def _read_text(archive: zipfile.ZipFile, name: str) -> str:
    try:
        return archive.read(name).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ArchiveError(
            "CSV/CSS file is not UTF-8 text", context={"file": name}, cause=exc
        ) from exc


def _stem(name: str) -> str:
    return PurePosixPath(name).stem


def extract_archive(source: ArchiveSource) -> ArchiveContents:
    """Read a camera bundle, validating its layout before anything is kept.

    The stylesheet's file name is written into the configuration block as
    ``css_file`` so the menu keeps pointing at it.
    """
    with _open_zip(source) as archive:
        names = [
            name
            for name in archive.namelist()
            if not name.startswith(_IGNORED_PREFIX) and not name.endswith("/")
        ]
        csv_name = _pick_single([n for n in names if n.endswith(".csv")], ".csv", "CSV")
        css_name = _pick_single([n for n in names if n.endswith(".css")], ".css", "CSS")
        png_names = [n for n in names if n.lower().endswith(".png")]

        csv_content = _read_text(archive, csv_name)
        css_content = _read_text(archive, css_name)
        icon_data = None
        if png_names:
            icon_data = base64.b64encode(archive.read(png_names[0])).decode("ascii")

    css_file_name = _stem(css_name)
    csv_content = set_config_value(csv_content, "css_file", css_file_name, after="display_name")

    _, config_rows = partition_rows(decode_rows(csv_content))
    config = resolve_config(config_rows)
    display_name = config.display_name
    if not display_name and config.brand and config.model:
        display_name = f"{config.brand} {config.model}".strip()

    return ArchiveContents(
        csv_content=csv_content,
        css_content=css_content,
        csv_file_name=_stem(csv_name),
        css_file_name=css_file_name,
        icon_data=icon_data,
        brand=config.brand,
        model=config.model,
        display_name=display_name,
    )


def new_camera_id(now: Optional[float] = None) -> str:
    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"custom-{millis}-{suffix}"


def create_record_from_archive(
    source: ArchiveSource,
    display_name: Optional[str] = None,
    *,
    now: Optional[float] = None,
    id_factory: Callable[[], str] | None = None,
) -> CameraRecord:
    """Turn an uploaded bundle into a persistable camera record.

    A user-supplied ``display_name`` wins; when the bundle names no brand or
    model it is also split into brand and model. The resolved names are
    written back into the configuration block.
    """
    contents = extract_archive(source)
    brand = contents.brand
    model = contents.model
    name = display_name.strip() if display_name else ""

    if name and not brand and not model:
        if " " in name:
            brand, model = name.split(" ", 1)
        else:
            brand, model = name, ""

    if not name:
        if brand and model:
            name = f"{brand} {model}".strip()
        else:
            name = contents.display_name or contents.csv_file_name

    csv_content = contents.csv_content
    if brand:
        csv_content = set_config_value(csv_content, "brand", brand)
    if model is not None:
        csv_content = set_config_value(csv_content, "model", model, after="brand")
    csv_content = set_config_value(csv_content, "display_name", name, at_end=True)

    created = time.time() if now is None else now
    camera_id = id_factory() if id_factory is not None else new_camera_id(created)
    logger.info("Imported camera %s (%s)", camera_id, name)
    return CameraRecord(
        id=camera_id,
        display_name=name,
        brand=brand,
        model=model,
        csv_content=csv_content,
        css_content=contents.css_content,
        css_file_name=contents.css_file_name or contents.csv_file_name,
        icon_data=contents.icon_data,
        created_at=int(created * 1000),
    )


def _config_icons(csv_content: str) -> list[tuple[str, str]]:
    _, config_rows = partition_rows(decode_rows(csv_content))
    icons: list[tuple[str, str]] = []
    for row in config_rows:
        if not row or not row[0].startswith("icon:"):
            continue
        parsed = parse_icon_row(row)
        if parsed is not None and parsed[1].strip():
            icons.append((parsed[0], parsed[1].strip()))
    return icons


def build_archive(
    *,
    csv_content: str,
    css_content: str,
    css_file_name: str,
    icon_data: Optional[str] = None,
) -> bytes:
    """Bundle a camera's files into zip bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(f"{css_file_name}.csv", csv_content)
        archive.writestr(f"{css_file_name}.css", css_content)
        if icon_data:
            try:
                archive.writestr("icon.png", base64.b64decode(icon_data, validate=True))
            except (binascii.Error, ValueError) as exc:
                raise ArchiveError(
                    "Camera icon is not valid base64 data",
                    context={"camera": css_file_name},
                    cause=exc,
                )
        for name, encoded in _config_icons(csv_content):
            try:
                archive.writestr(f"{name}.png", base64.b64decode(encoded, validate=True))
            except (binascii.Error, ValueError) as exc:
                logger.warning("Failed to add icon %s: %s", name, exc)
    return buffer.getvalue()


def export_archive(record: CameraRecord, destination: Path) -> Path:
    """Write ``record`` as ``<css_file_name>.zip`` into (or at) ``destination``."""
    target = Path(destination)
    if target.is_dir():
        target = target / f"{record.css_file_name}.zip"
    payload = build_archive(
        csv_content=record.csv_content,
        css_content=record.css_content,
        css_file_name=record.css_file_name,
        icon_data=record.icon_data,
    )
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as exc:
        raise ArchiveError(
            "Archive could not be written",
            context={"path": target},
            cause=exc,
        )
    logger.info("Exported camera %s to %s", record.id, target)
    return target
