"""Application settings resolution and persistence."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from cm_common.config.env import parse_path_env
from cm_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"
STORE_FILE_NAME = "cameras.json"
PACKAGED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def default_store_path() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "cm" / STORE_FILE_NAME


class AppSettings(BaseModel):
    """Where camera menus are read from and where custom cameras are kept."""

    data_dir: Path = Field(
        default=PACKAGED_DATA_DIR,
        description="Directory holding built-in <name>.csv / <name>.css pairs",
    )
    store_path: Path = Field(
        default_factory=default_store_path,
        description="JSON file holding user-imported camera records",
    )
    default_camera: Optional[str] = Field(
        default=None, description="Camera id opened when none is given"
    )

    def save(self, filepath: Path) -> None:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: Path) -> "AppSettings":
        return cls.model_validate_json(filepath.read_text())


class SettingsService:
    """Resolve settings from the settings file, then environment overrides."""

    def __init__(self, config_home: Optional[Path] = None) -> None:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        self.config_home = (config_home or base) / "cm"
        self.settings_path = self.config_home / SETTINGS_FILE_NAME

    def load(self) -> AppSettings:
        settings = self._read_file()
        overrides: dict[str, object] = {}
        data_dir = parse_path_env(os.environ.get("CM_DATA_DIR"))
        if data_dir is not None:
            overrides["data_dir"] = data_dir
        store_path = parse_path_env(os.environ.get("CM_STORE_PATH"))
        if store_path is not None:
            overrides["store_path"] = store_path
        default_camera = os.environ.get("CM_DEFAULT_CAMERA")
        if default_camera:
            overrides["default_camera"] = default_camera.strip()
        if overrides:
            settings = settings.model_copy(update=overrides)
        return settings

    def save(self, settings: AppSettings) -> Path:
        settings.save(self.settings_path)
        return self.settings_path

    def _read_file(self) -> AppSettings:
        if not self.settings_path.exists():
            return AppSettings()
        try:
            return AppSettings.load(self.settings_path)
        except (OSError, ValidationError, json.JSONDecodeError) as exc:
            raise ConfigurationError(
                f"Invalid settings file: {self.settings_path}",
                context={"path": self.settings_path},
                cause=exc,
            )
