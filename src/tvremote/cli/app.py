from __future__ import annotations

from typing import Annotated

import typer

from tvremote.utils.logging import setup_logging

from . import config as config_cmd
from . import device as device_cmd
from .connect import register as register_connect
from .keys import register as register_keys
from .scan import register as register_scan

app = typer.Typer(
    help="tvremote - discover smart TVs and send them remote key presses",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config", help="Show or create the config file")
app.add_typer(device_cmd.app, name="device", help="Inspect the remembered device")

register_scan(app)
register_connect(app)
register_keys(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output"),
    ] = False,
) -> None:
    """tvremote CLI."""
    setup_logging("DEBUG" if verbose else None)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"tvremote version {get_version('tvremote')}")
        raise typer.Exit()
