from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from tvremote.config import DiscoveryConfig
from tvremote.core import DiscoveryCoordinator
from tvremote.models import Device
from tvremote.utils.redaction import Redactor

from .common import build_store, load_settings_or_exit
from .connect import connect_and_remember

logger = logging.getLogger(__name__)


async def run_scan(config: DiscoveryConfig) -> tuple[list[Device], str | None]:
    coordinator = DiscoveryCoordinator(config)
    devices = await coordinator.scan()
    return devices, coordinator.last_error


def register(app: typer.Typer) -> None:
    @app.command()
    def scan(
        timeout: Annotated[
            float | None,
            typer.Option("--timeout", "-t", min=0.1, help="Scan duration in seconds"),
        ] = None,
        redact: Annotated[
            bool,
            typer.Option("--redact", help="Redact addresses and serials in output"),
        ] = False,
        connect: Annotated[
            int | None,
            typer.Option(
                "--connect", "-c", min=1, help="Connect to the Nth device found"
            ),
        ] = None,
    ) -> None:
        """Discover TVs on the local network via SSDP and mDNS."""
        console = Console()
        settings = load_settings_or_exit()

        config = settings.discovery
        if timeout is not None:
            config = config.model_copy(update={"scan_timeout": timeout})

        console.print(f"Scanning for TVs ({config.scan_timeout:.0f}s)...")
        logger.debug("Search targets: %s", ", ".join(config.search_targets))
        devices, last_error = asyncio.run(run_scan(config))

        if last_error:
            console.print(f"[yellow]{last_error}[/yellow]")

        if not devices:
            console.print("No TVs found.")
            return

        redactor = Redactor(enabled=redact)
        table = Table()
        table.add_column("#", justify="right")
        table.add_column("Name", style="green")
        table.add_column("Type", style="yellow")
        table.add_column("Host", style="cyan")
        table.add_column("Port", justify="right")
        table.add_column("Model")
        table.add_column("Serial")

        for index, device in enumerate(devices, start=1):
            table.add_row(
                str(index),
                device.name,
                device.kind.value,
                redactor.redact_host(device.host),
                str(device.port),
                device.model_name or "",
                redactor.redact_serial(device.serial_number),
            )

        console.print(table)
        console.print(f"\n[green]Found {len(devices)} device(s)[/green]")

        if connect is None:
            return
        if connect > len(devices):
            typer.echo(f"No device #{connect} in the results", err=True)
            raise typer.Exit(1)

        store = build_store(settings)
        device = connect_and_remember(devices[connect - 1], store, settings)
        console.print(f"[green]✓[/green] Connected to {device.name}")
