from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.syntax import Syntax

from tvremote.config import Settings, render_settings_toml, write_settings

from .common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config() -> None:
    """Show the active configuration as TOML."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    typer.echo(f"Config source: {path if exists else 'defaults'}")
    Console().print(Syntax(render_settings_toml(settings), "toml"))


@app.command("path")
def config_path() -> None:
    """Print where the config file is read from."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)
    typer.echo(str(path))
    if not exists:
        typer.echo("(not created yet; run 'tvremote config init')", err=True)


@app.command("init")
def init_config(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file"),
    ] = False,
) -> None:
    """Write a config file filled with the defaults."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if exists and not force:
        typer.echo(f"Config already exists at {path} (use --force to replace it)")
        return

    write_settings(Settings(), path)
    typer.echo(f"{'Replaced' if exists else 'Wrote'} default config at {path}")
