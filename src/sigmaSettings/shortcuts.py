"""Global shortcut bindings stored in the user settings.

Only the settings side lives here: converting between key combinations and
accelerator strings, and persisting user overrides.  Registering the
accelerators with the operating system is left to the host application.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from .config import GLOBAL_SHORTCUTS_KEY
from .errors import SettingsKeyError
from .settings.storage import StorageAdapter


@dataclass(frozen=True)
class ShortcutKeys:
    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False


@dataclass(frozen=True)
class ShortcutDefinition:
    id: str
    label_key: str
    default_shortcut: str


DEFAULT_GLOBAL_SHORTCUTS: tuple[ShortcutDefinition, ...] = (
    ShortcutDefinition("launchApp", "shortcuts.focusAppWindow", "Super+Shift+E"),
)


def keys_to_accelerator(keys: ShortcutKeys) -> str:
    parts: list[str] = []
    if keys.ctrl:
        parts.append("Control")
    if keys.alt:
        parts.append("Alt")
    if keys.meta:
        parts.append("Super")
    if keys.shift:
        parts.append("Shift")

    key_name = keys.key
    if key_name == " ":
        key_name = "Space"
    elif len(key_name) == 1:
        key_name = key_name.upper()

    parts.append(key_name)
    return "+".join(parts)


def accelerator_to_keys(accelerator: str) -> ShortcutKeys:
    key = ""
    modifiers = {"ctrl": False, "alt": False, "shift": False, "meta": False}
    for part in accelerator.split("+"):
        if part in ("Control", "CommandOrControl"):
            modifiers["ctrl"] = True
        elif part == "Alt":
            modifiers["alt"] = True
        elif part == "Shift":
            modifiers["shift"] = True
        elif part == "Super":
            modifiers["meta"] = True
        else:
            key = " " if part == "Space" else part
    return ShortcutKeys(key=key, **modifiers)


def format_accelerator(accelerator: str) -> str:
    """Return the human readable label for *accelerator*."""

    return (
        accelerator.replace("Super", "Win")
        .replace("Windows", "Win")
        .replace("CommandOrControl", "Ctrl")
        .replace("Control", "Ctrl")
    )


def normalize_accelerator(accelerator: str) -> str:
    return keys_to_accelerator(accelerator_to_keys(accelerator))


class GlobalShortcuts:
    """Resolve shortcut accelerators from defaults and stored user overrides."""

    def __init__(
        self,
        storage: StorageAdapter,
        definitions: Sequence[ShortcutDefinition] = DEFAULT_GLOBAL_SHORTCUTS,
    ) -> None:
        self._storage = storage
        self._definitions = {definition.id: definition for definition in definitions}

    @property
    def definitions(self) -> list[ShortcutDefinition]:
        return list(self._definitions.values())

    def user_shortcuts(self) -> dict[str, str]:
        raw = self._storage.get(GLOBAL_SHORTCUTS_KEY)
        if not isinstance(raw, dict):
            return {}
        return {key: value for key, value in raw.items() if isinstance(value, str)}

    def shortcut_string(self, shortcut_id: str) -> str:
        raw = self.user_shortcuts().get(shortcut_id)
        if raw is None:
            definition = self._definitions.get(shortcut_id)
            raw = definition.default_shortcut if definition else ""
        return normalize_accelerator(raw) if raw else ""

    def label(self, shortcut_id: str) -> str:
        return format_accelerator(self.shortcut_string(shortcut_id))

    def keys(self, shortcut_id: str) -> ShortcutKeys:
        return accelerator_to_keys(self.shortcut_string(shortcut_id))

    def is_customized(self, shortcut_id: str) -> bool:
        return shortcut_id in self.user_shortcuts()

    def source(self, shortcut_id: str) -> Literal["system", "user"]:
        return "user" if self.is_customized(shortcut_id) else "system"

    def set_shortcut(self, shortcut_id: str, keys: ShortcutKeys) -> str:
        self._require_known(shortcut_id)
        accelerator = keys_to_accelerator(keys)
        self._storage.set(GLOBAL_SHORTCUTS_KEY, {**self.user_shortcuts(), shortcut_id: accelerator})
        return accelerator

    def reset_shortcut(self, shortcut_id: str) -> None:
        self._require_known(shortcut_id)
        overrides = self.user_shortcuts()
        overrides.pop(shortcut_id, None)
        self._storage.set(GLOBAL_SHORTCUTS_KEY, overrides)

    def _require_known(self, shortcut_id: str) -> None:
        if shortcut_id not in self._definitions:
            raise SettingsKeyError(f"Unknown global shortcut: {shortcut_id}")


__all__ = [
    "DEFAULT_GLOBAL_SHORTCUTS",
    "GlobalShortcuts",
    "ShortcutDefinition",
    "ShortcutKeys",
    "accelerator_to_keys",
    "format_accelerator",
    "keys_to_accelerator",
    "normalize_accelerator",
]
