"""Forward-only schema migrations for the persisted user settings.

Each step moves the stored data from version ``N`` to ``N + 1`` and owns only
the keys it rewrites.  Steps are guarded by existence and shape checks so that
running one again on data it already migrated changes nothing; the driver
relies on that to retry a step after a crash without a transaction log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from ..banner.catalog import IdFactory, generate_short_id, key_for_index, key_for_index_or_default
from ..banner.manifest import DEFAULT_HOME_BANNER_FILE_NAME, HOME_BANNER_MEDIA, BannerMedia
from ..config import (
    HOME_BANNER_CUSTOM_MEDIA_KEY,
    HOME_BANNER_INDEX_KEY,
    HOME_BANNER_MEDIA_ID_KEY,
    HOME_BANNER_POSITIONS_KEY,
    INFUSION_BACKGROUND_KEY_TEMPLATE,
    INFUSION_PAGE_KEYS,
    NAVIGATOR_SYSTEM_ICONS_DIRECTORIES_KEY,
    NAVIGATOR_SYSTEM_ICONS_FILES_KEY,
    NAVIGATOR_SYSTEM_ICONS_KEY,
    USER_SETTINGS_SCHEMA_VERSION,
    USER_SETTINGS_SCHEMA_VERSION_KEY,
)
from ..errors import MigrationError
from ..utils.logging import get_logger
from .legacy import (
    CustomMediaItem,
    decode_background,
    decode_bool,
    decode_custom_media,
    decode_custom_media_ids,
    decode_int,
    decode_legacy_path_list,
    decode_media_id,
    decode_position,
    is_number,
    is_numeric_key,
)
from .storage import StorageAdapter
from .versioning import current_version, set_version

logger = get_logger("settings.migrations")

StepFunction = Callable[[StorageAdapter], None]


@dataclass(frozen=True, slots=True)
class MigrationStep:
    from_version: int
    to_version: int
    apply: StepFunction


class UserSettingsMigrator:
    """The table of user settings migration steps.

    The built-in manifest and the id factory are injected so that tests and
    alternative manifests resolve legacy indices against the right media.
    """

    def __init__(
        self,
        builtin: Sequence[BannerMedia] = HOME_BANNER_MEDIA,
        *,
        id_factory: IdFactory = generate_short_id,
        default_file_name: str = DEFAULT_HOME_BANNER_FILE_NAME,
    ) -> None:
        self._builtin: tuple[BannerMedia, ...] = tuple(builtin)
        self._new_id = id_factory
        self._default_file_name = default_file_name
        self.steps: tuple[MigrationStep, ...] = (
            MigrationStep(0, 1, self._migrate_0_to_1),
            MigrationStep(1, 2, self._migrate_1_to_2),
            MigrationStep(2, 3, self._migrate_2_to_3),
            MigrationStep(3, 4, self._migrate_3_to_4),
            MigrationStep(4, 5, self._migrate_4_to_5),
        )

    @property
    def latest_version(self) -> int:
        return self.steps[-1].to_version

    def step_for(self, from_version: int, to_version: int) -> Optional[MigrationStep]:
        for step in self.steps:
            if step.from_version == from_version and step.to_version == to_version:
                return step
        return None

    def apply_step(self, storage: StorageAdapter, from_version: int, to_version: int) -> None:
        step = self.step_for(from_version, to_version)
        if step is None:
            raise MigrationError(
                f"No settings migration from version {from_version} to {to_version}",
                from_version=from_version,
                to_version=to_version,
            )
        step.apply(storage)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _migrate_0_to_1(self, storage: StorageAdapter) -> None:
        # Version 1 only introduced the version marker itself.
        return None

    def _migrate_1_to_2(self, storage: StorageAdapter) -> None:
        """Split the shared system-icons flag into per-kind flags."""

        legacy = decode_bool(storage.get(NAVIGATOR_SYSTEM_ICONS_KEY))
        if not legacy:
            return
        for key in (NAVIGATOR_SYSTEM_ICONS_DIRECTORIES_KEY, NAVIGATOR_SYSTEM_ICONS_FILES_KEY):
            if not decode_bool(storage.get(key)):
                storage.set(key, legacy.value)

    def _migrate_2_to_3(self, storage: StorageAdapter) -> None:
        """Give custom media stable ids and re-key the position map by them."""

        raw_custom = storage.get(HOME_BANNER_CUSTOM_MEDIA_KEY)
        legacy_paths = decode_legacy_path_list(raw_custom)
        if legacy_paths:
            # Non-path entries stay in their slot until step 3->4 has resolved
            # the legacy selected index against the same list.
            migrated: list[Any] = []
            custom_ids: list[Optional[str]] = []
            for path, raw_entry in zip(legacy_paths.value, raw_custom):
                if path is None:
                    migrated.append(raw_entry)
                    custom_ids.append(None)
                    continue
                item = CustomMediaItem(path=path, id=self._new_id())
                migrated.append(item)
                custom_ids.append(item["id"])
            storage.set(HOME_BANNER_CUSTOM_MEDIA_KEY, migrated)
        else:
            decoded_ids = decode_custom_media_ids(raw_custom)
            custom_ids = decoded_ids.value if decoded_ids else []

        # An id made only of digits is a stable key, not a legacy index.
        known_ids = {media_id for media_id in custom_ids if media_id}

        def is_legacy_index(key: str) -> bool:
            return is_numeric_key(key) and key not in known_ids

        positions = storage.get(HOME_BANNER_POSITIONS_KEY)
        if not isinstance(positions, dict) or not any(is_legacy_index(key) for key in positions):
            return

        migrated_positions: dict[str, Any] = {}
        for key, value in positions.items():
            position = decode_position(value)
            if not position:
                logger.debug("Dropping malformed banner position %r: %s", key, position.reason)
                continue
            if not is_legacy_index(key):
                migrated_positions[key] = value
                continue
            target = key_for_index(custom_ids, self._builtin, int(key))
            if target is None:
                logger.debug("Dropping banner position %s: no media at that index", key)
                continue
            migrated_positions[target] = position.value
        storage.set(HOME_BANNER_POSITIONS_KEY, migrated_positions)

    def _migrate_3_to_4(self, storage: StorageAdapter) -> None:
        """Derive the stable selected media id from the legacy selected index.

        Once the selection is keyed by id, list positions no longer matter and
        custom media entries that are not ``{path, id}`` records are dropped.
        """

        raw_custom = storage.get(HOME_BANNER_CUSTOM_MEDIA_KEY)
        if not decode_media_id(storage.get(HOME_BANNER_MEDIA_ID_KEY)):
            storage.set(HOME_BANNER_MEDIA_ID_KEY, self._resolve_legacy_selection(storage, raw_custom))

        if isinstance(raw_custom, list):
            records = decode_custom_media(raw_custom)
            if len(records) != len(raw_custom):
                logger.debug("Dropping %d malformed custom media entries", len(raw_custom) - len(records))
                storage.set(HOME_BANNER_CUSTOM_MEDIA_KEY, records)

    def _resolve_legacy_selection(self, storage: StorageAdapter, raw_custom: Any) -> str:
        raw_index = storage.get(HOME_BANNER_INDEX_KEY)
        index = decode_int(raw_index)
        if index:
            position = index.value
        elif is_number(raw_index):
            # Fractional or non-finite indices point at no entry.
            return self._default_file_name
        else:
            position = 0
        decoded_ids = decode_custom_media_ids(raw_custom)
        custom_ids = decoded_ids.value if decoded_ids else []
        return key_for_index_or_default(custom_ids, self._builtin, position, self._default_file_name)

    def _migrate_4_to_5(self, storage: StorageAdapter) -> None:
        """Attach stable media ids to page background descriptors.

        At this schema version page backgrounds could only point at built-in
        media, so the legacy index is resolved against the manifest alone.
        """

        for page in INFUSION_PAGE_KEYS:
            key = INFUSION_BACKGROUND_KEY_TEMPLATE.format(page=page)
            background = decode_background(storage.get(key))
            if not background:
                continue
            descriptor = background.value
            if descriptor.get("mediaId"):
                continue
            index = descriptor.get("index")
            if not isinstance(index, int) or isinstance(index, bool):
                continue
            if not 0 <= index < len(self._builtin):
                logger.debug("Background index %s of page %s has no built-in media", index, page)
                continue
            storage.set(key, {**descriptor, "mediaId": self._builtin[index].file_name})


def migrate_storage_schema(
    storage: StorageAdapter,
    *,
    version_key: str,
    latest: int,
    migrate_step: Callable[[StorageAdapter, int, int], None],
) -> int:
    """Walk *storage* from its stored version up to *latest*.

    The version is bumped after every completed step, never before, so a
    failure leaves it at the last safe version and the failing step runs again
    next time.  Returns the version the store ends at.
    """

    version = current_version(storage, version_key)
    if version >= latest:
        return version

    logger.info("Migrating settings schema from version %d to %d", version, latest)
    while version < latest:
        next_version = version + 1
        try:
            migrate_step(storage, version, next_version)
            set_version(storage, next_version, version_key)
        except MigrationError:
            raise
        except Exception as exc:
            raise MigrationError(
                f"Settings migration from version {version} to {next_version} failed: {exc}",
                from_version=version,
                to_version=next_version,
            ) from exc
        logger.info("Settings schema migrated to version %d", next_version)
        version = next_version
    return version


def migrate_user_settings(
    storage: StorageAdapter,
    *,
    migrator: Optional[UserSettingsMigrator] = None,
    latest: int = USER_SETTINGS_SCHEMA_VERSION,
) -> int:
    """Bring the user settings held by *storage* up to *latest*."""

    migrator = migrator or UserSettingsMigrator()
    return migrate_storage_schema(
        storage,
        version_key=USER_SETTINGS_SCHEMA_VERSION_KEY,
        latest=latest,
        migrate_step=migrator.apply_step,
    )


__all__ = [
    "MigrationStep",
    "UserSettingsMigrator",
    "migrate_storage_schema",
    "migrate_user_settings",
]
