"""Registry of every known camera, keyed by document id."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cm_common.errors import CMError, StoreError
from cm_menu.api import (
    CameraConfig,
    MenuDocument,
    decode_rows,
    load_document,
    partition_rows,
    resolve_config,
    set_config_value,
)
from cm_app.services.archive_service import new_camera_id
from cm_app.services.camera_store import CameraRecord, CameraStore

logger = logging.getLogger(__name__)

OTHER_BRAND = "Other"


@dataclass(frozen=True)
class CatalogEntry:
    """A camera record plus the metadata resolved for it."""

    record: CameraRecord
    config: CameraConfig
    builtin: bool

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def brand(self) -> str:
        return self.config.brand or ""

    @property
    def label(self) -> str:
        brand = self.config.brand or ""
        model = self.config.model or ""
        if brand and model:
            return f"{brand} {model}".strip()
        return self.config.display_name or self.record.id


def _block_config(csv_content: str) -> CameraConfig:
    _, config_rows = partition_rows(decode_rows(csv_content))
    return resolve_config(config_rows)


def _resolve_record_config(record: CameraRecord) -> CameraConfig:
    block = _block_config(record.csv_content)
    config = CameraConfig(
        icons=block.icons,
        brand=block.brand or record.brand,
        model=block.model if block.model is not None else record.model,
        display_name=record.display_name or block.display_name,
        css_file=record.css_file_name or block.css_file,
    )
    return config.resolved(record.id)


def load_builtin_records(data_dir: Path) -> list[CameraRecord]:
    """Read ``<id>.csv`` files (and the stylesheet each names) from ``data_dir``."""
    if not data_dir.is_dir():
        logger.warning("Built-in camera directory not found: %s", data_dir)
        return []
    records: list[CameraRecord] = []
    for csv_path in sorted(data_dir.glob("*.csv")):
        camera_id = csv_path.stem
        csv_content = csv_path.read_text(encoding="utf-8")
        config = _block_config(csv_content).resolved(camera_id)
        css_name = config.css_file or camera_id
        css_path = data_dir / f"{css_name}.css"
        css_content = css_path.read_text(encoding="utf-8") if css_path.exists() else ""
        records.append(
            CameraRecord(
                id=camera_id,
                display_name=config.display_name or camera_id,
                brand=config.brand,
                model=config.model,
                csv_content=csv_content,
                css_content=css_content,
                css_file_name=css_name,
            )
        )
    return records


class CameraCatalog:
    """Single mapping from camera id to its record, metadata and parsed menu.

    Documents are parsed on first use and cached; saving or deleting a
    camera drops its cached document so the next read re-parses.
    """

    def __init__(self, store: CameraStore, data_dir: Optional[Path] = None) -> None:
        self.store = store
        self.data_dir = data_dir
        self._entries: dict[str, CatalogEntry] = {}
        self._documents: dict[str, MenuDocument] = {}
        self.refresh()

    def refresh(self) -> None:
        entries: dict[str, CatalogEntry] = {}
        if self.data_dir is not None:
            for record in load_builtin_records(self.data_dir):
                entries[record.id] = CatalogEntry(record, _resolve_record_config(record), True)
        try:
            custom = self.store.all()
        except StoreError as exc:
            logger.error("Failed to load custom cameras: %s", exc)
            custom = []
        for record in custom:
            entries[record.id] = CatalogEntry(record, _resolve_record_config(record), False)
        self._entries = entries
        self._documents.clear()

    def ids(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[CatalogEntry]:
        return list(self._entries.values())

    def get(self, camera_id: str) -> Optional[CatalogEntry]:
        return self._entries.get(camera_id)

    def require(self, camera_id: str) -> CatalogEntry:
        entry = self._entries.get(camera_id)
        if entry is None:
            raise CMError(f"Unknown camera: {camera_id}", context={"camera": camera_id})
        return entry

    def default_id(self, preferred: Optional[str] = None) -> Optional[str]:
        if preferred and preferred in self._entries:
            return preferred
        return next(iter(self._entries), None)

    def grouped_by_brand(self) -> dict[str, list[CatalogEntry]]:
        """Entries grouped by brand; brands and labels sorted case-insensitively."""
        groups: dict[str, list[CatalogEntry]] = {}
        for entry in self._entries.values():
            groups.setdefault(entry.brand or OTHER_BRAND, []).append(entry)
        return {
            brand: sorted(groups[brand], key=lambda e: e.label.casefold())
            for brand in sorted(groups, key=str.casefold)
        }

    def document(self, camera_id: str) -> MenuDocument:
        """Return the parsed menu for ``camera_id``; unknown ids give an empty menu."""
        cached = self._documents.get(camera_id)
        if cached is not None:
            return cached
        entry = self._entries.get(camera_id)
        text = entry.record.csv_content if entry is not None else None
        document = load_document(camera_id, text)
        self._documents[camera_id] = document
        return document

    def add(self, record: CameraRecord) -> CatalogEntry:
        self.store.put(record)
        entry = CatalogEntry(record, _resolve_record_config(record), False)
        self._entries[record.id] = entry
        self._documents.pop(record.id, None)
        return entry

    def remove(self, camera_id: str) -> bool:
        entry = self.require(camera_id)
        if entry.builtin:
            raise CMError(
                "Built-in cameras cannot be deleted",
                context={"camera": camera_id},
            )
        removed = self.store.delete(camera_id)
        self._entries.pop(camera_id, None)
        self._documents.pop(camera_id, None)
        return removed

    def save_menu(self, camera_id: str, csv_content: str) -> CatalogEntry:
        """Persist new menu text for a camera and return its (possibly new) entry.

        Built-in cameras are read-only, so their edits are saved as a new
        custom camera. The in-memory registry changes only after the store
        accepted the write.
        """
        entry = self.require(camera_id)
        if entry.builtin:
            display_name = f"{entry.label} (custom)"
            record = entry.record.model_copy(
                update={
                    "id": new_camera_id(),
                    "display_name": display_name,
                    "csv_content": set_config_value(
                        csv_content, "display_name", display_name, at_end=True
                    ),
                    "created_at": int(time.time() * 1000),
                }
            )
        else:
            record = entry.record.model_copy(update={"csv_content": csv_content})
        return self.add(record)
