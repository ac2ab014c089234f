"""Allow-list of storage key paths derived from the settings schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional

from ..config import USER_SETTINGS_SCHEMA_VERSION_KEY
from .schema import DEFAULT_SETTINGS


def collect_paths(schema: Mapping[str, Any], prefix: str = "") -> set[str]:
    """Return one dotted path per leaf value of *schema*.

    Non-empty mappings are records and are walked recursively.  Anything else
    is a leaf, including an empty mapping, which stands for a free-form map
    such as the per-media position table.
    """

    paths: set[str] = set()
    for key, value in schema.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            paths |= collect_paths(value, path)
        else:
            paths.add(path)
    return paths


def _collect_open_records(schema: Mapping[str, Any], prefix: str = "") -> set[str]:
    records: set[str] = set()
    for key, value in schema.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            if value:
                records |= _collect_open_records(value, path)
            else:
                records.add(path)
    return records


@dataclass(frozen=True)
class KeyPathAllowList:
    """Membership test for settings keys that may be written to storage.

    A key is accepted when it is a known leaf path, when it names a record
    that contains known paths (the whole record is written at once), or when
    it lives inside a free-form map.
    """

    paths: frozenset[str]
    open_records: frozenset[str]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str) or not key:
            return False
        if key in self.paths:
            return True
        record_prefix = key + "."
        if any(path.startswith(record_prefix) for path in self.paths):
            return True
        return any(key.startswith(record + ".") for record in self.open_records)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.paths))

    def __len__(self) -> int:
        return len(self.paths)


def build_allowed_storage_keys(schema: Optional[Mapping[str, Any]] = None) -> KeyPathAllowList:
    """Build the allow-list for *schema*, defaulting to the user settings shape."""

    source = DEFAULT_SETTINGS if schema is None else schema
    paths = collect_paths(source)
    paths.add(USER_SETTINGS_SCHEMA_VERSION_KEY)
    return KeyPathAllowList(frozenset(paths), frozenset(_collect_open_records(source)))


__all__ = ["KeyPathAllowList", "build_allowed_storage_keys", "collect_paths"]
