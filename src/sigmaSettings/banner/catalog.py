"""Ordered home banner catalog and its three addressing schemes.

The catalog is every custom item (in insertion order) followed by every
built-in item (in manifest order).  Entries can be addressed by

* position index: offset into that concatenation, shifts whenever custom media
  is added or removed;
* position key: stable string, the built-in ``file_name`` or the custom ``id``;
* legacy index: an index persisted by an older release, resolved with the same
  custom-first-then-built-in offset rule.

Every lookup falls back instead of failing: exact match, then the default
built-in file, then the first entry, then "empty catalog".
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable, Literal, Mapping, Optional, Sequence, Union

from ..config import CUSTOM_MEDIA_ID_LENGTH
from ..media_classifier import MediaKind, classify_media, file_name_from_path, is_url
from ..settings.legacy import CustomMediaItem
from .manifest import DEFAULT_HOME_BANNER_FILE_NAME, HOME_BANNER_MEDIA, BannerMedia

IdFactory = Callable[[], str]


def generate_short_id() -> str:
    """Return a fresh 8 character lower-case hex id for a custom entry.

    Ids made only of digits are skipped: they would be mistaken for legacy
    position indices by the position-map migration.
    """

    while True:
        candidate = uuid.uuid4().hex[:CUSTOM_MEDIA_ID_LENGTH]
        if not candidate.isdigit():
            return candidate


@dataclass(frozen=True, slots=True)
class BuiltinEntry:
    index: int
    media: BannerMedia
    kind: Literal["builtin"] = field(default="builtin", init=False)

    @property
    def type(self) -> MediaKind:
        return self.media.type


@dataclass(frozen=True, slots=True)
class CustomEntry:
    index: int
    path: str
    id: str
    file_name: str
    type: MediaKind
    kind: Literal["custom"] = field(default="custom", init=False)

    @classmethod
    def from_item(cls, index: int, item: CustomMediaItem) -> "CustomEntry":
        path = item["path"]
        return cls(
            index=index,
            path=path,
            id=item["id"],
            file_name=file_name_from_path(path),
            type=classify_media(path),
        )


CatalogEntry = Union[BuiltinEntry, CustomEntry]


@dataclass(frozen=True, slots=True)
class Removal:
    """Result of :func:`remove_custom`."""

    custom: list[CustomMediaItem]
    positions: dict[str, object]
    selected_index: int
    selected_key: str
    removed: Optional[CustomMediaItem] = None


def all_entries(
    custom: Sequence[CustomMediaItem],
    builtin: Sequence[BannerMedia] = HOME_BANNER_MEDIA,
) -> list[CatalogEntry]:
    entries: list[CatalogEntry] = [CustomEntry.from_item(index, item) for index, item in enumerate(custom)]
    entries.extend(BuiltinEntry(index, media) for index, media in enumerate(builtin))
    return entries


def position_key(entry: CatalogEntry) -> str:
    if isinstance(entry, BuiltinEntry):
        return entry.media.file_name
    return entry.id


def display_name(entry: CatalogEntry) -> str:
    if isinstance(entry, BuiltinEntry):
        return entry.media.name
    return entry.file_name


def find_index_by_key(entries: Sequence[CatalogEntry], key: str) -> Optional[int]:
    for index, entry in enumerate(entries):
        if position_key(entry) == key:
            return index
    return None


def resolve_by_key(entries: Sequence[CatalogEntry], key: str) -> Optional[CatalogEntry]:
    index = find_index_by_key(entries, key)
    return entries[index] if index is not None else None


def resolve_selection(
    entries: Sequence[CatalogEntry],
    key: Optional[str],
    default_file_name: str = DEFAULT_HOME_BANNER_FILE_NAME,
) -> Optional[int]:
    """Return the position index selected by *key*, applying the fallback chain.

    ``None`` is only returned for an empty catalog.
    """

    if not entries:
        return None
    if key:
        found = find_index_by_key(entries, key)
        if found is not None:
            return found
    for index, entry in enumerate(entries):
        if isinstance(entry, BuiltinEntry) and entry.media.file_name == default_file_name:
            return index
    return 0


def key_for_index(
    custom_ids: Sequence[Optional[str]],
    builtin: Sequence[BannerMedia],
    index: int,
) -> Optional[str]:
    """Translate a position index into a position key.

    *custom_ids* lists the id of each custom entry in order; a ``None`` slot is
    an entry without a usable id and does not resolve.
    """

    custom_count = len(custom_ids)
    if 0 <= index < custom_count:
        return custom_ids[index]
    builtin_index = index - custom_count
    if 0 <= builtin_index < len(builtin):
        return builtin[builtin_index].file_name
    return None


def key_for_index_or_default(
    custom_ids: Sequence[Optional[str]],
    builtin: Sequence[BannerMedia],
    index: int,
    default_file_name: str = DEFAULT_HOME_BANNER_FILE_NAME,
) -> str:
    return key_for_index(custom_ids, builtin, index) or default_file_name


def add_custom(
    current: Sequence[CustomMediaItem],
    new_paths: Sequence[str],
    id_factory: IdFactory = generate_short_id,
) -> tuple[list[CustomMediaItem], list[CustomMediaItem]]:
    """Append one custom entry per path, in input order, without deduplication."""

    added = [CustomMediaItem(path=path, id=id_factory()) for path in new_paths]
    return [*current, *added], added


def add_url(
    current: Sequence[CustomMediaItem],
    url: str,
    id_factory: IdFactory = generate_short_id,
) -> tuple[list[CustomMediaItem], Optional[CustomMediaItem]]:
    """Append *url* as a custom entry unless it is invalid or already present."""

    trimmed = url.strip()
    if not trimmed or not is_url(trimmed):
        return list(current), None
    if any(item["path"] == trimmed for item in current):
        return list(current), None
    updated, added = add_custom(current, [trimmed], id_factory)
    return updated, added[0]


def remove_custom(
    current: Sequence[CustomMediaItem],
    path: str,
    *,
    positions: Mapping[str, object],
    selected_index: int,
    builtin: Sequence[BannerMedia] = HOME_BANNER_MEDIA,
    default_file_name: str = DEFAULT_HOME_BANNER_FILE_NAME,
) -> Removal:
    """Remove the first custom entry stored at *path* and re-anchor the selection.

    When the removed entry sat at or before the selected position the
    selection moves back by one, then it is clamped into the shrunken catalog
    and translated back into a position key.
    """

    remove_index = next((index for index, item in enumerate(current) if item["path"] == path), None)
    removed = current[remove_index] if remove_index is not None else None
    remaining = [item for index, item in enumerate(current) if index != remove_index]

    updated_positions = dict(positions)
    if removed is not None:
        updated_positions.pop(removed["id"], None)

    new_index = selected_index
    if remove_index is not None and selected_index >= remove_index and selected_index > 0:
        new_index = max(0, selected_index - 1)

    total = len(remaining) + len(builtin)
    new_index = max(0, min(new_index, total - 1))

    if total > 0:
        key = key_for_index_or_default([item["id"] for item in remaining], builtin, new_index, default_file_name)
    else:
        key = default_file_name

    return Removal(
        custom=remaining,
        positions=updated_positions,
        selected_index=new_index,
        selected_key=key,
        removed=removed,
    )


__all__ = [
    "BuiltinEntry",
    "CatalogEntry",
    "CustomEntry",
    "Removal",
    "add_custom",
    "add_url",
    "all_entries",
    "display_name",
    "find_index_by_key",
    "generate_short_id",
    "key_for_index",
    "key_for_index_or_default",
    "position_key",
    "remove_custom",
    "resolve_by_key",
    "resolve_selection",
]
