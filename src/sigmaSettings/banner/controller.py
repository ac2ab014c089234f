"""Store-bound home banner operations used by the UI layer."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ..config import (
    HOME_BANNER_CUSTOM_MEDIA_KEY,
    HOME_BANNER_INDEX_KEY,
    HOME_BANNER_MEDIA_ID_KEY,
    HOME_BANNER_POSITIONS_KEY,
)
from ..media_classifier import file_name_from_path
from ..settings.legacy import (
    BannerPosition,
    CustomMediaItem,
    decode_custom_media,
    decode_media_id,
    decode_position,
    decode_positions,
)
from ..settings.schema import DEFAULT_POSITION
from ..settings.storage import StorageAdapter
from ..utils.logging import get_logger
from .catalog import (
    CatalogEntry,
    IdFactory,
    Removal,
    add_custom,
    add_url,
    all_entries,
    generate_short_id,
    position_key,
    remove_custom,
    resolve_selection,
)
from .manifest import DEFAULT_HOME_BANNER_FILE_NAME, HOME_BANNER_MEDIA, BannerMedia

logger = get_logger("banner")

_REPEATED_SLASHES = re.compile(r"/+")


class HomeBannerMedia:
    """Expose the banner catalog stored in a settings adapter.

    Every call reads the current state from *storage*; the object keeps no
    cached copy.  Mutations are expected to be serialised by the caller.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        builtin: Sequence[BannerMedia] = HOME_BANNER_MEDIA,
        *,
        id_factory: IdFactory = generate_short_id,
        default_file_name: str = DEFAULT_HOME_BANNER_FILE_NAME,
    ) -> None:
        self._storage = storage
        self._builtin = tuple(builtin)
        self._new_id = id_factory
        self._default_file_name = default_file_name

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def builtin_count(self) -> int:
        return len(self._builtin)

    @property
    def custom_items(self) -> list[CustomMediaItem]:
        return decode_custom_media(self._storage.get(HOME_BANNER_CUSTOM_MEDIA_KEY))

    @property
    def entries(self) -> list[CatalogEntry]:
        return all_entries(self.custom_items, self._builtin)

    @property
    def total_count(self) -> int:
        return len(self.custom_items) + len(self._builtin)

    @property
    def media_id(self) -> str:
        decoded = decode_media_id(self._storage.get(HOME_BANNER_MEDIA_ID_KEY))
        return decoded.value if decoded else self._default_file_name

    @property
    def current_index(self) -> int:
        index = resolve_selection(self.entries, self.media_id, self._default_file_name)
        return index if index is not None else 0

    @property
    def current_item(self) -> Optional[CatalogEntry]:
        entries = self.entries
        index = resolve_selection(entries, self.media_id, self._default_file_name)
        return entries[index] if index is not None else None

    def position_for(self, entry: CatalogEntry) -> BannerPosition:
        positions = decode_positions(self._storage.get(HOME_BANNER_POSITIONS_KEY))
        decoded = decode_position(positions.get(position_key(entry)))
        return decoded.value if decoded else BannerPosition(**DEFAULT_POSITION)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def select_media(self, index: int) -> bool:
        entries = self.entries
        if not 0 <= index < len(entries):
            return False
        self._select(position_key(entries[index]), index)
        return True

    def add_files_from_paths(self, source_paths: Sequence[str], destination_dir: str) -> list[CustomMediaItem]:
        """Register files copied into *destination_dir* as custom media.

        Copying the files is the caller's job; only the destination paths are
        recorded.  The first new entry becomes the selection.
        """

        if not source_paths or not destination_dir:
            return []

        base = destination_dir.replace("\\", "/")
        new_paths = [
            _REPEATED_SLASHES.sub("/", f"{base}/{file_name_from_path(source)}") for source in source_paths
        ]
        current = self.custom_items
        updated, added = add_custom(current, new_paths, self._new_id)
        self._storage.set(HOME_BANNER_CUSTOM_MEDIA_KEY, updated)
        self._select(added[0]["id"], len(current))
        logger.info("Added %d custom banner media", len(added))
        return added

    def add_media_url(self, url: str) -> Optional[CustomMediaItem]:
        current = self.custom_items
        updated, added = add_url(current, url, self._new_id)
        if added is None:
            return None
        self._storage.set(HOME_BANNER_CUSTOM_MEDIA_KEY, updated)
        self._select(added["id"], len(current))
        return added

    def remove_custom_media(self, path: str) -> Removal:
        positions = decode_positions(self._storage.get(HOME_BANNER_POSITIONS_KEY))
        removal = remove_custom(
            self.custom_items,
            path,
            positions=positions,
            selected_index=self.current_index,
            builtin=self._builtin,
            default_file_name=self._default_file_name,
        )
        self._storage.set(HOME_BANNER_CUSTOM_MEDIA_KEY, removal.custom)
        if removal.positions != positions:
            self._storage.set(HOME_BANNER_POSITIONS_KEY, removal.positions)
        self._select(removal.selected_key, removal.selected_index)
        return removal

    def set_position(self, entry: CatalogEntry, position_x: float, position_y: float, zoom: float) -> None:
        positions = decode_positions(self._storage.get(HOME_BANNER_POSITIONS_KEY))
        positions[position_key(entry)] = BannerPosition(positionX=position_x, positionY=position_y, zoom=zoom)
        self._storage.set(HOME_BANNER_POSITIONS_KEY, positions)

    def _select(self, key: str, index: int) -> None:
        # The index is kept in sync for readers that predate stable ids.
        self._storage.set(HOME_BANNER_MEDIA_ID_KEY, key)
        self._storage.set(HOME_BANNER_INDEX_KEY, index)


__all__ = ["HomeBannerMedia"]
