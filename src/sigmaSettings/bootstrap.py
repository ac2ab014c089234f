"""Startup wiring: open the settings file and bring it up to date."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .banner.manifest import HOME_BANNER_MEDIA, BannerMedia
from .errors import MigrationError, SettingsLoadError
from .errors.handler import ErrorHandler, ErrorSeverity
from .settings.manager import SettingsManager
from .settings.migrations import UserSettingsMigrator, migrate_user_settings
from .utils.logging import get_logger


def open_user_settings(
    path: Optional[Path] = None,
    *,
    builtin: Sequence[BannerMedia] = HOME_BANNER_MEDIA,
    error_handler: Optional[ErrorHandler] = None,
) -> SettingsManager:
    """Load and migrate the user settings without ever blocking startup.

    Unreadable files and failed migrations are reported as warnings through
    *error_handler*; the returned manager is usable either way.  A failed
    migration keeps the last completed version so the next launch retries it.
    """

    handler = error_handler or ErrorHandler(get_logger("bootstrap"))
    manager = SettingsManager(path)
    try:
        manager.load()
    except SettingsLoadError as exc:
        handler.handle(exc, ErrorSeverity.WARNING, context={"settings_path": str(manager.path)})
        return manager

    try:
        migrate_user_settings(manager, migrator=UserSettingsMigrator(builtin))
    except MigrationError as exc:
        handler.handle(
            exc,
            ErrorSeverity.WARNING,
            context={"from_version": exc.from_version, "to_version": exc.to_version},
        )
    return manager


__all__ = ["open_user_settings"]
