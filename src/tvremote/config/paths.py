"""XDG locations for the config file and the device store."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "tvremote"
CONFIG_FILENAME = "config.toml"


def _xdg_home(env_var: str, *fallback: str) -> Path:
    value = os.environ.get(env_var)
    # Relative XDG values are invalid and ignored.
    if value and os.path.isabs(value):
        return Path(value)
    return Path.home().joinpath(*fallback)


def xdg_config_home() -> Path:
    return _xdg_home("XDG_CONFIG_HOME", ".config")


def xdg_data_home() -> Path:
    return _xdg_home("XDG_DATA_HOME", ".local", "share")


def default_config_path() -> Path:
    return xdg_config_home() / APP_NAME / CONFIG_FILENAME


def default_data_dir() -> Path:
    return xdg_data_home() / APP_NAME


def expand_path(value: str) -> Path:
    """Expand ``~`` and ``$VARS`` in a path taken from the config file."""
    return Path(os.path.expandvars(value)).expanduser()
