"""Built-in home banner media shipped with the application.

The order of :data:`HOME_BANNER_MEDIA` is part of the persisted data format:
legacy settings address built-in media by their offset in this tuple, so new
entries are only ever appended.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from ..media_classifier import MediaKind


@dataclass(frozen=True, slots=True)
class BannerMedia:
    """One built-in banner image or video."""

    file_name: str
    name: str
    type: MediaKind = MediaKind.IMAGE


HOME_BANNER_MEDIA: Final[tuple[BannerMedia, ...]] = (
    BannerMedia("a-clear-sky-above-the-mountains.jpg", "A clear sky above the mountains"),
    BannerMedia("aurora-over-the-fjord.jpg", "Aurora over the fjord"),
    BannerMedia("evening-lake-reflection.jpg", "Evening lake reflection"),
    BannerMedia("forest-morning-fog.jpg", "Forest morning fog"),
    BannerMedia("night-city-lights.jpg", "Night city lights"),
    BannerMedia("ocean-waves-loop.mp4", "Ocean waves", MediaKind.VIDEO),
    BannerMedia("rain-on-glass-loop.mp4", "Rain on glass", MediaKind.VIDEO),
)

DEFAULT_HOME_BANNER_FILE_NAME: Final[str] = "a-clear-sky-above-the-mountains.jpg"


def find_builtin(file_name: str, builtin: Sequence[BannerMedia] = HOME_BANNER_MEDIA) -> BannerMedia | None:
    """Return the manifest entry called *file_name*, if any."""

    for media in builtin:
        if media.file_name == file_name:
            return media
    return None


__all__ = ["BannerMedia", "DEFAULT_HOME_BANNER_FILE_NAME", "HOME_BANNER_MEDIA", "find_builtin"]
