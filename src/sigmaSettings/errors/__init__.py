"""Custom exception hierarchy for sigmaSettings."""

from __future__ import annotations


class SigmaSettingsError(Exception):
    """Base class for all custom errors raised by sigmaSettings."""


class SettingsError(SigmaSettingsError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


class SettingsKeyError(SettingsError):
    """Raised when a write targets a key path the settings schema does not know."""


class MigrationError(SigmaSettingsError):
    """Raised when a schema migration step cannot be completed.

    The stored schema version is left at the last step that finished, so the
    failing step runs again on the next launch.
    """

    def __init__(self, message: str, *, from_version: int | None = None, to_version: int | None = None) -> None:
        super().__init__(message)
        self.from_version = from_version
        self.to_version = to_version


__all__ = [
    "MigrationError",
    "SettingsError",
    "SettingsKeyError",
    "SettingsLoadError",
    "SettingsValidationError",
    "SigmaSettingsError",
]
