"""Application layer between the menu engine and the UI (catalog, store, archives)."""

from cm_common import configure_logging as _configure_logging

_configure_logging()

from .services.catalog import CameraCatalog, CatalogEntry
from .services.edit_session import EditSession

__all__ = ["CameraCatalog", "CatalogEntry", "EditSession"]
