from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from tvremote.core import command
from tvremote.models import RemoteButton, VendorKind

from .common import KIND_CHOICES, parse_kind


def register(app: typer.Typer) -> None:
    @app.command()
    def keys(
        kind: Annotated[
            str | None,
            typer.Option("--type", help="Only show one vendor's tokens"),
        ] = None,
    ) -> None:
        """List the buttons and the token each vendor receives for them."""
        kinds: list[VendorKind] = (
            [parse_kind(kind)] if kind is not None else list(KIND_CHOICES.values())
        )

        table = Table()
        table.add_column("Button", style="cyan")
        table.add_column("Label")
        for vendor in kinds:
            table.add_column(vendor.value, style="green")

        for button in RemoteButton:
            table.add_row(
                button.value,
                button.display_name,
                *(command(button, vendor) for vendor in kinds),
            )

        Console().print(table)
