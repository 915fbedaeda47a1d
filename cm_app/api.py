"""Stable application-layer API surface."""

from cm_app.services.archive_service import (
    ArchiveContents,
    build_archive,
    create_record_from_archive,
    export_archive,
    extract_archive,
    new_camera_id,
)
from cm_app.services.camera_store import CameraRecord, CameraStore
from cm_app.services.catalog import OTHER_BRAND, CameraCatalog, CatalogEntry
from cm_app.services.edit_session import EditSession
from cm_app.services.settings_service import (
    PACKAGED_DATA_DIR,
    AppSettings,
    SettingsService,
)
from cm_app.viewmodels.menu_view import MenuViewModel

__all__ = [
    "ArchiveContents",
    "AppSettings",
    "CameraCatalog",
    "CameraRecord",
    "CameraStore",
    "CatalogEntry",
    "EditSession",
    "MenuViewModel",
    "OTHER_BRAND",
    "PACKAGED_DATA_DIR",
    "SettingsService",
    "build_archive",
    "create_record_from_archive",
    "export_archive",
    "extract_archive",
    "new_camera_id",
]
