"""tvremote - discover smart TVs on the local network and send them key presses."""

from __future__ import annotations

from importlib.metadata import version

from .config import ControlConfig, DiscoveryConfig, Settings, get_settings
from .core import ControlService, DiscoveryCoordinator, command
from .models import Device, RemoteButton, VendorKind, manual_device
from .storage import DeviceStore

__all__ = [
    "ControlConfig",
    "ControlService",
    "Device",
    "DeviceStore",
    "DiscoveryConfig",
    "DiscoveryCoordinator",
    "RemoteButton",
    "Settings",
    "VendorKind",
    "__version__",
    "command",
    "get_settings",
    "manual_device",
]

__version__ = version("tvremote")
