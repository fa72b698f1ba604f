from __future__ import annotations

from pathlib import Path

import typer

from tvremote.config import (
    Settings,
    data_dir_from_settings,
    get_settings,
    resolve_config_path,
)
from tvremote.models import VendorKind
from tvremote.storage import DeviceStore

KIND_CHOICES: dict[str, VendorKind] = {
    "roku": VendorKind.ROKU,
    "samsung": VendorKind.SAMSUNG,
    "lg": VendorKind.LG,
    "apple-tv": VendorKind.APPLE_TV,
}


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_store(settings: Settings) -> DeviceStore:
    return DeviceStore(data_dir_from_settings(settings))


def parse_kind(value: str) -> VendorKind:
    """Accept ``roku``/``samsung``/``lg``/``apple-tv`` or a display name."""
    key = value.strip().lower().replace("_", "-").replace(" ", "-")
    if key in KIND_CHOICES:
        return KIND_CHOICES[key]
    for kind in KIND_CHOICES.values():
        if kind.value.lower() == value.strip().lower():
            return kind
    choices = ", ".join(KIND_CHOICES)
    raise typer.BadParameter(f"unknown device type {value!r} (choose from {choices})")
