"""Storage adapter protocol and an in-memory implementation.

Settings are addressed by dot-delimited key paths such as
``navigator.useSystemIconsForFiles``.  Every component that reads or writes
settings receives an adapter explicitly; there is no process-wide settings
object.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Container, Mapping, MutableMapping, Optional, Protocol

from ..errors import SettingsKeyError


class StorageAdapter(Protocol):
    """Minimal key-path store consumed by migrations and the banner catalog."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored at *key* or *default* when it is absent."""

    def set(self, key: str, value: Any) -> None:
        """Persist *value* at *key*."""


def get_path(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Return the value for dotted *key* inside *data*."""

    target: Any = data
    for part in key.split("."):
        if not isinstance(target, Mapping) or part not in target:
            return default
        target = target[part]
    return target


def set_path(data: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Assign *value* to dotted *key*, creating intermediate records."""

    parts = key.split(".")
    target = data
    for part in parts[:-1]:
        branch = target.get(part)
        if not isinstance(branch, dict):
            branch = {}
            target[part] = branch
        target = branch
    target[parts[-1]] = value


class MemoryStorage:
    """Dictionary backed :class:`StorageAdapter`.

    Values are copied on the way in and out so callers can never mutate the
    stored state behind the adapter's back.
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, Any]] = None,
        *,
        allowed_keys: Optional[Container[str]] = None,
    ) -> None:
        self._data: dict[str, Any] = deepcopy(dict(initial or {}))
        self._allowed = allowed_keys
        self.write_count = 0

    def get(self, key: str, default: Any = None) -> Any:
        return deepcopy(get_path(self._data, key, default))

    def set(self, key: str, value: Any) -> None:
        if self._allowed is not None and key not in self._allowed:
            raise SettingsKeyError(f"Unknown settings key: {key}")
        set_path(self._data, key, deepcopy(value))
        self.write_count += 1

    def snapshot(self) -> dict[str, Any]:
        return deepcopy(self._data)


__all__ = ["MemoryStorage", "StorageAdapter", "get_path", "set_path"]
