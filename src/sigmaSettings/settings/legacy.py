"""Decode attempts for settings values written by older schema versions.

Persisted settings can hold anything an earlier release (or a user editing the
file by hand) put there.  Each ``decode_*`` function inspects one raw value and
returns a :class:`Decoded` result instead of raising, so migrations can skip
the sub-case they do not recognise and carry on.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypedDict, TypeVar

from ..config import DEFAULT_POSITION_X, DEFAULT_POSITION_Y, DEFAULT_ZOOM

T = TypeVar("T")

_NUMERIC_KEY = re.compile(r"[0-9]+")


class CustomMediaItem(TypedDict):
    path: str
    id: str


class BannerPosition(TypedDict):
    positionX: float
    positionY: float
    zoom: float


@dataclass(frozen=True, slots=True)
class Decoded(Generic[T]):
    """Outcome of a decode attempt: either a value or the reason it failed."""

    ok: bool
    value: Optional[T] = None
    reason: str = ""

    @classmethod
    def success(cls, value: T) -> "Decoded[T]":
        return cls(True, value)

    @classmethod
    def failure(cls, reason: str) -> "Decoded[T]":
        return cls(False, None, reason)

    def __bool__(self) -> bool:
        return self.ok


def is_number(value: Any) -> bool:
    """Return ``True`` for ints and floats, excluding booleans."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def decode_int(value: Any) -> Decoded[int]:
    """Accept ints and integral floats; reject booleans."""

    if isinstance(value, bool):
        return Decoded.failure("boolean is not an integer")
    if isinstance(value, int):
        return Decoded.success(value)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return Decoded.success(int(value))
    return Decoded.failure(f"expected integer, got {type(value).__name__}")


def decode_version(value: Any) -> Decoded[int]:
    decoded = decode_int(value)
    if decoded and decoded.value < 0:
        return Decoded.failure("negative schema version")
    return decoded


def decode_bool(value: Any) -> Decoded[bool]:
    if isinstance(value, bool):
        return Decoded.success(value)
    return Decoded.failure(f"expected bool, got {type(value).__name__}")


def decode_media_id(value: Any) -> Decoded[str]:
    """A stored media id is usable only when it is a non-blank string."""

    if isinstance(value, str) and value.strip():
        return Decoded.success(value)
    return Decoded.failure("missing or blank media id")


def decode_legacy_path_list(value: Any) -> Decoded[list[Optional[str]]]:
    """Recognise the pre-id custom media format: a list of plain path strings.

    Detection looks at the first element only.  Stray non-string entries keep
    their slot as ``None`` so legacy indices still line up with the list.
    """

    if not isinstance(value, list) or not value:
        return Decoded.failure("not a non-empty list")
    if not isinstance(value[0], str):
        return Decoded.failure("first element is not a path string")
    return Decoded.success([entry if isinstance(entry, str) else None for entry in value])


def decode_custom_media_ids(value: Any) -> Decoded[list[Optional[str]]]:
    """Return the id of every custom media record, keeping list positions.

    Records without a usable id keep their slot as ``None`` so that legacy
    position indices still line up with the list.
    """

    if not isinstance(value, list):
        return Decoded.failure("custom media is not a list")
    ids: list[Optional[str]] = []
    for entry in value:
        media_id = entry.get("id") if isinstance(entry, dict) else None
        ids.append(media_id if isinstance(media_id, str) and media_id else None)
    return Decoded.success(ids)


def decode_custom_media(value: Any) -> list[CustomMediaItem]:
    """Return the well-formed ``{path, id}`` records stored in *value*."""

    if not isinstance(value, list):
        return []
    items: list[CustomMediaItem] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        path = entry.get("path")
        media_id = entry.get("id")
        if isinstance(path, str) and path and isinstance(media_id, str) and media_id:
            items.append(CustomMediaItem(path=path, id=media_id))
    return items


def decode_position(value: Any) -> Decoded[BannerPosition]:
    """Normalise a stored banner position, filling missing numbers with defaults."""

    if not isinstance(value, dict):
        return Decoded.failure("position is not a record")
    x = value.get("positionX")
    y = value.get("positionY")
    zoom = value.get("zoom")
    return Decoded.success(
        BannerPosition(
            positionX=x if is_number(x) else DEFAULT_POSITION_X,
            positionY=y if is_number(y) else DEFAULT_POSITION_Y,
            zoom=zoom if is_number(zoom) else DEFAULT_ZOOM,
        )
    )


def decode_positions(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return dict(value)
    return {}


def is_numeric_key(key: str) -> bool:
    """Return ``True`` for keys written by the index-keyed position map."""

    return bool(_NUMERIC_KEY.fullmatch(key))


def decode_background(value: Any) -> Decoded[dict[str, Any]]:
    if isinstance(value, dict):
        return Decoded.success(dict(value))
    return Decoded.failure("background is not a record")


__all__ = [
    "BannerPosition",
    "CustomMediaItem",
    "Decoded",
    "decode_background",
    "decode_bool",
    "decode_custom_media",
    "decode_custom_media_ids",
    "decode_int",
    "decode_legacy_path_list",
    "decode_media_id",
    "decode_position",
    "decode_positions",
    "decode_version",
    "is_number",
    "is_numeric_key",
]
