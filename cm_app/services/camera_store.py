"""Key-value store of user-imported camera records."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cm_common.errors import StoreError

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class CameraRecord(BaseModel):
    """One user-added camera, persisted with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Lookup key")
    display_name: str = Field(alias="displayName")
    brand: Optional[str] = None
    model: Optional[str] = None
    csv_content: str = Field(alias="csvContent")
    css_content: str = Field(default="", alias="cssContent")
    css_file_name: str = Field(alias="cssFileName")
    icon_data: Optional[str] = Field(default=None, alias="iconData")
    created_at: int = Field(default=0, alias="createdAt", description="Epoch milliseconds")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CameraStore:
    """JSON-file record store keyed by camera id.

    Every failure to read or write surfaces as ``StoreError`` so callers can
    report it and let the user retry without losing in-memory edits.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def all(self) -> list[CameraRecord]:
        records = list(self._read().values())
        return sorted(records, key=lambda record: record.created_at)

    def get(self, camera_id: str) -> Optional[CameraRecord]:
        return self._read().get(camera_id)

    def put(self, record: CameraRecord) -> None:
        records = self._read()
        records[record.id] = record
        self._write(records)
        logger.info("Saved camera record %s", record.id)

    def delete(self, camera_id: str) -> bool:
        records = self._read()
        if records.pop(camera_id, None) is None:
            return False
        self._write(records)
        logger.info("Deleted camera record %s", camera_id)
        return True

    def _read(self) -> dict[str, CameraRecord]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(
                "Camera store could not be read",
                context={"path": self.path},
                cause=exc,
            )
        try:
            records = [CameraRecord.model_validate(item) for item in data.get("cameras", [])]
        except (AttributeError, ValidationError) as exc:
            raise StoreError(
                "Camera store holds malformed records",
                context={"path": self.path},
                cause=exc,
            )
        return {record.id: record for record in records}

    def _write(self, records: dict[str, CameraRecord]) -> None:
        payload = {
            "version": STORE_VERSION,
            "cameras": [record.to_payload() for record in records.values()],
        }
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise StoreError(
                "Camera store could not be written",
                context={"path": self.path},
                cause=exc,
            )
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
