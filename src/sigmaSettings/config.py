"""Default configuration values for sigmaSettings."""

from __future__ import annotations

from typing import Final

# ``USER_SETTINGS_SCHEMA_VERSION_KEY`` is the reserved top-level key that holds
# the structural revision of the persisted user settings.  A missing value is
# read as version 0 so that settings written before versioning existed walk
# through every migration step.
USER_SETTINGS_SCHEMA_VERSION_KEY: Final[str] = "__schemaVersion"
USER_SETTINGS_SCHEMA_VERSION: Final[int] = 5

# ---------------------------------------------------------------------------
# Reserved storage keys
# ---------------------------------------------------------------------------

HOME_BANNER_CUSTOM_MEDIA_KEY: Final[str] = "homeBannerCustomMedia"
HOME_BANNER_MEDIA_ID_KEY: Final[str] = "homeBannerMediaId"
# Legacy position index of the selected banner. Still written for readers that
# predate ``homeBannerMediaId`` but never trusted over the stable id.
HOME_BANNER_INDEX_KEY: Final[str] = "homeBannerIndex"
HOME_BANNER_POSITIONS_KEY: Final[str] = "homeBannerPositions"
GLOBAL_SHORTCUTS_KEY: Final[str] = "globalShortcuts"

NAVIGATOR_SYSTEM_ICONS_KEY: Final[str] = "navigator.useSystemIcons"
NAVIGATOR_SYSTEM_ICONS_DIRECTORIES_KEY: Final[str] = "navigator.useSystemIconsForDirectories"
NAVIGATOR_SYSTEM_ICONS_FILES_KEY: Final[str] = "navigator.useSystemIconsForFiles"

# Pages that can carry their own "infusion" background descriptor.
INFUSION_PAGE_KEYS: Final[tuple[str, ...]] = (
    "global",
    "home",
    "navigator",
    "dashboard",
    "settings",
    "extensions",
)
INFUSION_BACKGROUND_KEY_TEMPLATE: Final[str] = "infusion.pages.{page}.background"

# ---------------------------------------------------------------------------
# Home banner media
# ---------------------------------------------------------------------------

CUSTOM_MEDIA_ID_LENGTH: Final[int] = 8
DEFAULT_POSITION_X: Final[float] = 50
DEFAULT_POSITION_Y: Final[float] = 50
DEFAULT_ZOOM: Final[float] = 100

BANNER_VIDEO_EXTENSIONS: Final[frozenset[str]] = frozenset({
    "mp4",
    "webm",
    "ogg",
    "mov",
    "avi",
    "mkv",
})
BANNER_PICKER_EXTENSIONS: Final[tuple[str, ...]] = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "webp",
    "mp4",
    "webm",
    "ogg",
    "mov",
    "avi",
    "mkv",
)
URL_PREFIXES: Final[tuple[str, ...]] = ("http://", "https://")

SETTINGS_FILE_NAME: Final[str] = "user-settings.json"
APP_DIR_NAME: Final[str] = "sigmaSettings"
