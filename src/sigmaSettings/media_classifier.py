"""Media type classification helpers for banner paths and URLs."""

from __future__ import annotations

import re
from enum import Enum
from urllib.parse import urlsplit

from .config import BANNER_VIDEO_EXTENSIONS, URL_PREFIXES

_SEPARATORS = re.compile(r"[/\\]")


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


def is_url(value: str) -> bool:
    """Return ``True`` when *value* is an ``http`` or ``https`` URL."""

    return value.startswith(URL_PREFIXES)


def file_name_from_path(path: str) -> str:
    """Return the last component of *path*, accepting both separator styles."""

    name = _SEPARATORS.split(path)[-1]
    return name or path


def get_extension(path_or_url: str) -> str:
    """Return the lower-case extension of *path_or_url* without the dot.

    URLs are reduced to their path first so query strings and fragments do not
    leak into the extension.
    """

    clean = path_or_url
    if is_url(clean):
        try:
            clean = urlsplit(clean).path
        except ValueError:
            clean = clean.split("?")[0].split("#")[0]

    dot = clean.rfind(".")
    return clean[dot + 1 :].lower() if dot >= 0 else ""


def classify_media(path_or_url: str) -> MediaKind:
    """Return the banner media kind for *path_or_url*.

    Anything without a known video extension is shown as an image, matching
    how the banner renders unknown files.
    """

    target = path_or_url if is_url(path_or_url) else file_name_from_path(path_or_url)
    if get_extension(target) in BANNER_VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    return MediaKind.IMAGE


__all__ = ["MediaKind", "classify_media", "file_name_from_path", "get_extension", "is_url"]
