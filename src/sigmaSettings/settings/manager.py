"""Settings file management with key validation and change notifications."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal, Slot

from ..config import APP_DIR_NAME, SETTINGS_FILE_NAME
from ..errors import SettingsKeyError, SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from ..utils.logging import get_logger
from .keypaths import KeyPathAllowList, build_allowed_storage_keys
from .schema import merge_with_defaults
from .storage import get_path, set_path

logger = get_logger("settings.manager")


def default_settings_path() -> Path:
    """Return the default settings file location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME / SETTINGS_FILE_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME / SETTINGS_FILE_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME / SETTINGS_FILE_NAME
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME / SETTINGS_FILE_NAME
    return Path.home() / ".config" / APP_DIR_NAME / SETTINGS_FILE_NAME


class SettingsManager(QObject):
    """JSON file backed settings store.

    ``get`` and ``set`` operate on the raw persisted payload so migrations see
    exactly what an older release wrote; :meth:`values` returns the view merged
    with defaults.
    """

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None, *, allowed_keys: Optional[KeyPathAllowList] = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = {}
        self._allowed = allowed_keys or build_allowed_storage_keys()

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = default_settings_path()
        return self._path

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating an empty file if missing."""

        path = self.path
        if not path.exists():
            self._data = {}
            self._write()
            return
        try:
            payload = read_json(path)
        except (OSError, ValueError) as exc:
            raise SettingsLoadError(f"Cannot read settings file {path}: {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise SettingsLoadError(
                f"Settings file {path} holds {type(payload).__name__}, expected an object"
            )
        self._data = payload
        logger.debug("Loaded settings from %s", path)

    @Slot(str, result="QVariant")
    @Slot(str, "QVariant", result="QVariant")
    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the stored value for dotted *key*, or *default* when absent."""

        return deepcopy(get_path(self._data, key, default))

    @Slot(str, "QVariant")
    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change."""

        if key not in self._allowed:
            raise SettingsKeyError(f"Unknown settings key: {key}")

        def _normalise(payload: Any) -> Any:
            """Convert values to JSON-friendly Python types."""

            if isinstance(payload, dict):
                return {str(k): _normalise(v) for k, v in payload.items()}
            if isinstance(payload, (list, tuple)):
                return [_normalise(item) for item in payload]
            if isinstance(payload, Path):
                return str(payload)
            return payload

        value = _normalise(value)
        set_path(self._data, key, deepcopy(value))
        self._write()
        self.settingsChanged.emit(key, value)

    def values(self) -> dict[str, Any]:
        """Return the stored settings merged with defaults and validated."""

        try:
            return merge_with_defaults(self._data)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc

    def raw(self) -> dict[str, Any]:
        return deepcopy(self._data)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self) -> None:
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        write_json(path, self._data)


__all__ = ["SettingsManager", "default_settings_path"]
