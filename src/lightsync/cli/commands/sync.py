from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from lightsync.cli.helpers import (
    load_settings_or_exit,
    open_database,
    open_registry_or_exit,
    snapshot_path_or_default,
)
from lightsync.core import (
    AccessoryCache,
    SnapshotDiscovery,
    SnapshotTransport,
    load_snapshot,
    run_sync,
)
from lightsync.models import Device


def sync(
    snapshot: Path | None = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Discovery snapshot to reconcile against. Defaults to the data dir.",
    ),
) -> None:
    """Reconcile discovered lights with the registered accessories."""
    console = Console()

    settings = load_settings_or_exit()
    db = open_database(settings)
    snapshot_path = snapshot_path_or_default(db, snapshot)
    registry = open_registry_or_exit(db)

    cache = AccessoryCache()
    registry.restore_into(cache)
    console.print(
        f"Restored {len(cache)} cached accessory(ies); reading {snapshot_path}"
    )

    def transport_factory(device: Device) -> SnapshotTransport:
        return SnapshotTransport(device, load_snapshot(snapshot_path))

    summary = asyncio.run(
        run_sync(
            cache,
            discovery=SnapshotDiscovery(snapshot_path),
            registry=registry,
            transport_factory=transport_factory,
            settings=settings,
        )
    )

    table = Table(title="Sync summary")
    table.add_column("Registered", style="green")
    table.add_column("New", style="cyan")
    table.add_column("Cached, seen")
    table.add_column("Cached, not seen", style="yellow")
    table.add_row(
        str(summary.registered),
        str(summary.new),
        str(summary.cached_seen),
        str(summary.unseen),
    )
    console.print(table)


def register(app: typer.Typer) -> None:
    app.command()(sync)
