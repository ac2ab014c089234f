from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings tests", exc_type=ImportError)

from sigmaSettings.bootstrap import open_user_settings
from sigmaSettings.errors import MigrationError, SettingsLoadError
from sigmaSettings.errors.handler import ErrorHandler, ErrorSeverity
from sigmaSettings.settings import migrations
from sigmaSettings.settings.versioning import current_version


@pytest.fixture
def handler() -> ErrorHandler:
    return ErrorHandler(logging.getLogger("tests.bootstrap"))


def test_fresh_install_is_migrated(tmp_path: Path, builtin, handler: ErrorHandler) -> None:
    settings_path = tmp_path / "nested" / "settings.json"
    manager = open_user_settings(settings_path, builtin=builtin, error_handler=handler)

    assert current_version(manager) == 5
    assert manager.get("homeBannerMediaId") == "builtin1.jpg"
    assert json.loads(settings_path.read_text(encoding="utf-8"))["__schemaVersion"] == 5
    assert handler.history == []


def test_unreadable_file_is_a_warning(tmp_path: Path, handler: ErrorHandler) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{broken", encoding="utf-8")
    messages: list[tuple[str, ErrorSeverity]] = []
    handler.register_ui_callback(lambda message, severity: messages.append((message, severity)))

    manager = open_user_settings(settings_path, error_handler=handler)

    assert manager.values()["homeBannerIndex"] == 0
    assert settings_path.read_text(encoding="utf-8") == "{broken"
    (error, severity), = handler.history
    assert isinstance(error, SettingsLoadError)
    assert severity is ErrorSeverity.WARNING
    assert messages and messages[0][1] is ErrorSeverity.WARNING


def test_failed_migration_is_a_warning(tmp_path: Path, monkeypatch, handler: ErrorHandler, caplog) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"__schemaVersion": 3}), encoding="utf-8")

    def explode(self, storage) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(migrations.UserSettingsMigrator, "_migrate_3_to_4", explode)

    with caplog.at_level(logging.WARNING, logger="tests.bootstrap"):
        manager = open_user_settings(settings_path, error_handler=handler)

    assert current_version(manager) == 3
    (error, severity), = handler.history
    assert isinstance(error, MigrationError)
    assert (error.from_version, error.to_version) == (3, 4)
    assert severity is ErrorSeverity.WARNING
    assert "MigrationError" in caplog.text
