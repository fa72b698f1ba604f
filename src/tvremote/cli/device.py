from __future__ import annotations

import typer
from rich.console import Console

from .common import build_store, load_settings_or_exit

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_device() -> None:
    """Show the device commands are sent to."""
    store = build_store(load_settings_or_exit())
    device = store.load()

    console = Console()
    if device is None:
        console.print("No device stored. Run 'tvremote scan' or 'tvremote connect'.")
        return

    console.print(f"[bold]{device.name}[/bold]")
    console.print(f"Type: {device.kind.value}")
    console.print(f"Address: {device.host}:{device.port}")
    if device.model_name:
        console.print(f"Model: {device.model_name}")
    if device.serial_number:
        console.print(f"Serial: {device.serial_number}")
    if device.last_connected:
        console.print(f"Last connected: {device.last_connected.isoformat()}")
    console.print(f"Stored in: {store.last_device_path}")


@app.command("forget")
def forget_device() -> None:
    """Forget the stored device."""
    store = build_store(load_settings_or_exit())
    store.clear()
    typer.echo("Forgot stored device")
