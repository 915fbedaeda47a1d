from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cm_app.api import AppSettings, CameraCatalog, CameraStore, SettingsService
from cm_common.api import configure_logging
from cm_ui.tui.core.protocols import UI
from cm_ui.tui.system.facade import TUI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False

    # Lazily initialized services
    _ui: Optional[UI] = None
    _settings_service: Optional[SettingsService] = None
    _settings: Optional[AppSettings] = None
    _store: Optional[CameraStore] = None
    _catalog: Optional[CameraCatalog] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from cm_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def settings_service(self) -> SettingsService:
        if self._settings_service is None:
            self._settings_service = SettingsService()
        return self._settings_service

    @settings_service.setter
    def settings_service(self, value: SettingsService):
        self._settings_service = value

    @property
    def settings(self) -> AppSettings:
        if self._settings is None:
            self._settings = self.settings_service.load()
        return self._settings

    @settings.setter
    def settings(self, value: AppSettings):
        self._settings = value

    @property
    def store(self) -> CameraStore:
        if self._store is None:
            self._store = CameraStore(self.settings.store_path)
        return self._store

    @store.setter
    def store(self, value: CameraStore):
        self._store = value

    @property
    def catalog(self) -> CameraCatalog:
        if self._catalog is None:
            self._catalog = CameraCatalog(self.store, self.settings.data_dir)
        return self._catalog

    @catalog.setter
    def catalog(self, value: CameraCatalog):
        self._catalog = value

    def reset(self) -> None:
        """Drop every cached service so the next access rebuilds it."""
        self._ui = None
        self._settings_service = None
        self._settings = None
        self._store = None
        self._catalog = None


__all__ = [
    "UIContext",
    "configure_logging",
]
