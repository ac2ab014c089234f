"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from .banner.catalog import display_name, position_key
from .banner.controller import HomeBannerMedia
from .config import USER_SETTINGS_SCHEMA_VERSION
from .errors import MigrationError, SettingsLoadError, SigmaSettingsError
from .settings.keypaths import build_allowed_storage_keys
from .settings.manager import SettingsManager
from .settings.migrations import migrate_user_settings
from .settings.versioning import current_version

app = typer.Typer(help="Inspect and migrate persisted user settings")
banner_app = typer.Typer(help="Manage home banner media")
app.add_typer(banner_app, name="banner")

SettingsOption = typer.Option(None, "--settings", "-s", help="Settings file (defaults to the per-user location)")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SettingsLoadError, MigrationError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except SigmaSettingsError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load(settings: Optional[Path]) -> SettingsManager:
    manager = SettingsManager(settings)
    manager.load()
    return manager


def _open_migrated(settings: Optional[Path]) -> SettingsManager:
    manager = _load(settings)
    migrate_user_settings(manager)
    return manager


@app.command()
@_handle_errors
def migrate(settings: Optional[Path] = SettingsOption) -> None:
    """Migrate the settings file to the latest schema version."""

    manager = _load(settings)
    before = current_version(manager)
    after = migrate_user_settings(manager)
    if before == after:
        print(f"[green]Settings already at schema version {after}")
    else:
        print(f"[green]Migrated settings from version {before} to {after}")


@app.command()
@_handle_errors
def version(settings: Optional[Path] = SettingsOption) -> None:
    """Show the stored and the latest schema version."""

    manager = _load(settings)
    print(f"stored: {current_version(manager)}  latest: {USER_SETTINGS_SCHEMA_VERSION}")


@app.command()
@_handle_errors
def get(key: str, settings: Optional[Path] = SettingsOption) -> None:
    """Print the raw stored value of KEY as JSON."""

    manager = _load(settings)
    typer.echo(json.dumps(manager.get(key), ensure_ascii=False))


@app.command()
def keys() -> None:
    """List every settings key path that may be written."""

    for path in build_allowed_storage_keys():
        typer.echo(path)


@banner_app.command("list")
@_handle_errors
def banner_list(settings: Optional[Path] = SettingsOption) -> None:
    """List banner media in catalog order."""

    media = HomeBannerMedia(_open_migrated(settings))
    selected = media.current_index
    table = Table("#", "key", "kind", "name", "type")
    for index, entry in enumerate(media.entries):
        marker = f"*{index}" if index == selected else str(index)
        table.add_row(marker, position_key(entry), entry.kind, display_name(entry), entry.type.value)
    print(table)


@banner_app.command("select")
@_handle_errors
def banner_select(index: int, settings: Optional[Path] = SettingsOption) -> None:
    """Select the banner media at INDEX."""

    media = HomeBannerMedia(_open_migrated(settings))
    if not media.select_media(index):
        typer.echo(f"Error: no banner media at index {index}", err=True)
        raise typer.Exit(1)
    print(f"[green]Selected {media.media_id}")


@banner_app.command("add-url")
@_handle_errors
def banner_add_url(url: str, settings: Optional[Path] = SettingsOption) -> None:
    """Add a remote image or video URL as custom banner media."""

    media = HomeBannerMedia(_open_migrated(settings))
    added = media.add_media_url(url)
    if added is None:
        print("[yellow]URL is invalid or already present")
        return
    print(f"[green]Added {added['path']} as {added['id']}")


@banner_app.command("remove")
@_handle_errors
def banner_remove(path: str, settings: Optional[Path] = SettingsOption) -> None:
    """Remove the custom banner media stored at PATH."""

    media = HomeBannerMedia(_open_migrated(settings))
    removal = media.remove_custom_media(path)
    if removal.removed is None:
        print(f"[yellow]No custom banner media at {path}")
        return
    print(f"[green]Removed {path}; selected {removal.selected_key}")


if __name__ == "__main__":  # pragma: no cover
    app()
