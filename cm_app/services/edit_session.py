"""Edit mode: a working copy of one camera's menu, saved through the catalog."""

from __future__ import annotations

import logging
from typing import Optional

from cm_common.errors import StoreError
from cm_menu.api import MenuDocument, SelectionPath, TreeEditor, render_document
from cm_app.services.catalog import CameraCatalog, CatalogEntry

logger = logging.getLogger(__name__)


class EditSession:
    """Own a ``TreeEditor`` over the canonical document of ``camera_id``.

    The canonical document is replaced only by a successful ``save``; a
    failed save keeps the editor so the user can retry.
    """

    def __init__(
        self,
        catalog: CameraCatalog,
        camera_id: str,
        selection: Optional[SelectionPath] = None,
    ) -> None:
        self.catalog = catalog
        self.camera_id = camera_id
        self.document: MenuDocument = catalog.document(camera_id)
        self.editor: Optional[TreeEditor] = TreeEditor(self.document.tree, selection)

    @property
    def active(self) -> bool:
        return self.editor is not None

    def _require_editor(self) -> TreeEditor:
        if self.editor is None:
            raise RuntimeError("Edit session is closed")
        return self.editor

    def render(self) -> str:
        return render_document(self.document, self._require_editor().tree, keep_icons=True)

    def save(self) -> CatalogEntry:
        """Persist the working tree and reload the canonical document."""
        editor = self._require_editor()
        csv_content = self.render()
        try:
            entry = self.catalog.save_menu(self.camera_id, csv_content)
        except StoreError:
            logger.warning("Saving camera %s failed; edits kept for retry", self.camera_id)
            raise
        if entry.id != self.camera_id:
            logger.info("Saved built-in camera %s as custom camera %s", self.camera_id, entry.id)
        self.camera_id = entry.id
        self.document = self.catalog.document(entry.id)
        self.editor = TreeEditor(self.document.tree, editor.selection)
        return entry

    def cancel(self) -> None:
        self.editor = None
