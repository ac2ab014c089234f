"""Schema helpers for the user settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..banner.manifest import DEFAULT_HOME_BANNER_FILE_NAME
from ..config import (
    DEFAULT_POSITION_X,
    DEFAULT_POSITION_Y,
    DEFAULT_ZOOM,
    INFUSION_PAGE_KEYS,
    USER_SETTINGS_SCHEMA_VERSION_KEY,
)


def _default_background() -> dict[str, Any]:
    return {"type": "none", "path": "", "index": 0, "mediaId": ""}


DEFAULT_SETTINGS: dict[str, Any] = {
    "navigator": {
        "useSystemIconsForDirectories": False,
        "useSystemIconsForFiles": False,
    },
    "homeBannerCustomMedia": [],
    "homeBannerMediaId": DEFAULT_HOME_BANNER_FILE_NAME,
    "homeBannerIndex": 0,
    "homeBannerPositions": {},
    "globalShortcuts": {},
    "infusion": {
        "pages": {page: {"background": _default_background()} for page in INFUSION_PAGE_KEYS},
    },
}

_POSITION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "positionX": {"type": "number"},
        "positionY": {"type": "number"},
        "zoom": {"type": "number", "exclusiveMinimum": 0},
    },
    "required": ["positionX", "positionY", "zoom"],
}

_BACKGROUND_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string"},
        "path": {"type": "string"},
        "index": {"type": "integer", "minimum": 0},
        "mediaId": {"type": "string"},
    },
    "additionalProperties": True,
}

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "sigmaSettings/user-settings.schema.json",
    "type": "object",
    "required": ["homeBannerCustomMedia", "homeBannerMediaId", "homeBannerPositions"],
    "properties": {
        USER_SETTINGS_SCHEMA_VERSION_KEY: {"type": "integer", "minimum": 0},
        "navigator": {
            "type": "object",
            "properties": {
                "useSystemIcons": {"type": "boolean"},
                "useSystemIconsForDirectories": {"type": "boolean"},
                "useSystemIconsForFiles": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
        "homeBannerCustomMedia": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "minLength": 1},
                    "id": {"type": "string", "minLength": 1},
                },
                "required": ["path", "id"],
            },
        },
        "homeBannerMediaId": {"type": "string", "minLength": 1},
        "homeBannerIndex": {"type": "integer", "minimum": 0},
        "homeBannerPositions": {
            "type": "object",
            "additionalProperties": _POSITION_SCHEMA,
        },
        "globalShortcuts": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "infusion": {
            "type": "object",
            "properties": {
                "pages": {
                    "type": "object",
                    "additionalProperties": {
                        "type": "object",
                        "properties": {"background": _BACKGROUND_SCHEMA},
                    },
                },
            },
        },
    },
    "additionalProperties": True,
}

DEFAULT_POSITION: dict[str, float] = {
    "positionX": DEFAULT_POSITION_X,
    "positionY": DEFAULT_POSITION_Y,
    "zoom": DEFAULT_ZOOM,
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def _merge_records(base: dict[str, Any], overlay: dict[str, Any]) -> None:
    for key, value in overlay.items():
        current = base.get(key)
        # Records with a known shape are merged key by key; free-form maps
        # (empty in the defaults) and leaves are replaced wholesale.
        if isinstance(current, dict) and current and isinstance(value, dict):
            _merge_records(current, value)
            continue
        base[key] = deepcopy(value)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        _merge_records(merged, data)
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = [
    "DEFAULT_POSITION",
    "DEFAULT_SETTINGS",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "validate_settings",
]
