from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from lightsync.config import (
    Settings,
    data_dir_from_settings,
    get_settings,
    resolve_config_path,
)
from lightsync.models import Accessory
from lightsync.storage import Database, FileAccessoryRegistry


def fail(exc: Exception) -> NoReturn:
    """Report a user-facing error on stderr and exit with status 1."""
    typer.echo(str(exc), err=True)
    raise typer.Exit(1) from exc


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        fail(exc)


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        fail(exc)


def open_database(settings: Settings, data_dir: Path | None = None) -> Database:
    return Database(data_dir or data_dir_from_settings(settings))


def load_accessories_or_exit(db: Database) -> list[Accessory]:
    try:
        return db.load_accessories()
    except ValueError as exc:
        fail(exc)


def open_registry_or_exit(db: Database) -> FileAccessoryRegistry:
    # the registry reads accessories.json eagerly; a corrupt file ends the run
    try:
        return FileAccessoryRegistry(db)
    except ValueError as exc:
        fail(exc)


def snapshot_path_or_default(db: Database, snapshot: Path | None) -> Path:
    return snapshot or db.snapshot_path
