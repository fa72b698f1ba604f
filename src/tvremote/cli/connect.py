from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console

from tvremote.config import Settings
from tvremote.core import ControlService
from tvremote.models import Device, RemoteButton, manual_device
from tvremote.storage import DeviceStore

from .common import build_store, load_settings_or_exit, parse_kind


def connect_and_remember(
    device: Device, store: DeviceStore, settings: Settings
) -> Device:
    async def _run() -> Device:
        service = ControlService(store=store, config=settings.control)
        connected = await service.connect(device)
        await service.disconnect()
        return connected

    return asyncio.run(_run())


async def send_buttons(
    service: ControlService, buttons: list[RemoteButton]
) -> RemoteButton | None:
    """Send ``buttons`` in order and return the first one that failed."""
    try:
        for button in buttons:
            if not await service.send_command(button):
                return button
        return None
    finally:
        await service.disconnect()


def register(app: typer.Typer) -> None:
    @app.command()
    def connect(
        host: Annotated[str, typer.Argument(help="IP address or hostname of the TV")],
        kind: Annotated[
            str,
            typer.Option("--type", help="roku, samsung, lg or apple-tv"),
        ] = "roku",
        port: Annotated[
            int | None,
            typer.Option("--port", "-p", min=1, max=65535, help="Override the port"),
        ] = None,
    ) -> None:
        """Remember a TV by address so 'send' can reach it."""
        settings = load_settings_or_exit()
        device = manual_device(host, parse_kind(kind), port)
        connected = connect_and_remember(device, build_store(settings), settings)

        Console().print(
            f"[green]✓[/green] Connected to {connected.name} "
            f"at {connected.host}:{connected.port}"
        )

    @app.command()
    def send(
        buttons: Annotated[
            list[RemoteButton],
            typer.Argument(help="Buttons to press, in order", show_default=False),
        ],
    ) -> None:
        """Press buttons on the remembered TV."""
        settings = load_settings_or_exit()
        store = build_store(settings)

        async def _run() -> tuple[RemoteButton | None, str | None]:
            service = ControlService(store=store, config=settings.control)
            failed = await send_buttons(service, buttons)
            return failed, service.last_error

        failed, last_error = asyncio.run(_run())
        if failed is not None:
            typer.echo(f"{failed.value}: {last_error}", err=True)
            raise typer.Exit(1)

        typer.echo(f"Sent {len(buttons)} key press(es)")
