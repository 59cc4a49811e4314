from __future__ import annotations

from typing import Annotated

import typer

from lightsync.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands.accessories import register as register_accessories
from .commands.init import register as register_init
from .commands.sync import register as register_sync

app = typer.Typer(
    help="lightsync - keep Magichome accessories in step with the network",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config")

register_init(app)
register_sync(app)
register_accessories(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (default: $LOGLEVEL or INFO)"),
    ] = None,
) -> None:
    """lightsync CLI."""
    setup_logging(log_level)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"lightsync version {get_version('lightsync')}")
        raise typer.Exit()
