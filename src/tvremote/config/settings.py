from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import default_config_path, default_data_dir, expand_path

CONFIG_ENV_VAR = "TVREMOTE_CONFIG"

DEFAULT_SEARCH_TARGETS = (
    "roku:ecp",
    "urn:dial-multiscreen-org:service:dial:1",
    "urn:schemas-upnp-org:device:MediaRenderer:1",
)


class StorageConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class DiscoveryConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    search_targets: tuple[str, ...] = DEFAULT_SEARCH_TARGETS
    ssdp_window: float = Field(default=5.0, gt=0)
    scan_timeout: float = Field(default=30.0, gt=0)
    resolve_timeout: float = Field(default=3.0, gt=0)


class ControlConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    http_timeout: float = Field(default=5.0, gt=0)
    ws_ready_timeout: float = Field(default=0.5, gt=0)
    roap_port: int = Field(default=8080, ge=1, le=65535)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    storage: StorageConfig = Field(default_factory=StorageConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    control: ControlConfig = Field(default_factory=ControlConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.storage.path)


def _toml_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(item) for item in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value)
    return str(value)


def render_settings_toml(settings: Settings) -> str:
    """Render ``settings`` as a complete TOML document, one table per section."""
    lines = ["# tvremote configuration"]
    for section, values in settings.model_dump().items():
        lines += ["", f"[{section}]"]
        lines += [f"{key} = {_toml_value(value)}" for key, value in values.items()]
    return "\n".join(lines) + "\n"


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
