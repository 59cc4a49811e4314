from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from lightsync.cli.helpers import (
    load_accessories_or_exit,
    load_settings_or_exit,
    open_database,
)


def list_accessories() -> None:
    """List registered accessories."""
    settings = load_settings_or_exit()
    accessories = load_accessories_or_exit(open_database(settings))

    console = Console()

    if not accessories:
        console.print("No accessories registered.")
        console.print("Use 'lightsync sync' to register discovered lights.")
        return

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Unique ID", style="green")
    table.add_column("IP")
    table.add_column("Type")
    table.add_column("Restarts unseen", style="yellow")

    for accessory in sorted(accessories, key=lambda item: item.display_name):
        context = accessory.context
        table.add_row(
            accessory.display_name,
            accessory.unique_id,
            context.cached_ip_address,
            context.device_type,
            str(context.restarts_since_seen),
        )

    console.print(table)


def register(app: typer.Typer) -> None:
    app.command("accessories")(list_accessories)
