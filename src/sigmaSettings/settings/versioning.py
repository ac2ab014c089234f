"""Read and write the schema version stored alongside the user settings."""

from __future__ import annotations

from ..config import USER_SETTINGS_SCHEMA_VERSION_KEY
from ..utils.logging import get_logger
from .legacy import decode_version
from .storage import StorageAdapter

logger = get_logger("settings.versioning")


def current_version(storage: StorageAdapter, key: str = USER_SETTINGS_SCHEMA_VERSION_KEY) -> int:
    """Return the stored schema version, or ``0`` when none is recorded."""

    raw = storage.get(key)
    decoded = decode_version(raw)
    if not decoded:
        if raw is not None:
            logger.debug("Ignoring unusable schema version %r: %s", raw, decoded.reason)
        return 0
    return decoded.value


def set_version(storage: StorageAdapter, version: int, key: str = USER_SETTINGS_SCHEMA_VERSION_KEY) -> None:
    """Store *version*. Ordering is the caller's responsibility."""

    storage.set(key, int(version))


__all__ = ["current_version", "set_version"]
