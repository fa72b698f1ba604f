"""Data models for tvremote."""

from tvremote.models.buttons import HapticCategory, RemoteButton, haptic_category
from tvremote.models.device import DEFAULT_PORTS, Device, VendorKind, manual_device

__all__ = [
    "DEFAULT_PORTS",
    "Device",
    "HapticCategory",
    "RemoteButton",
    "VendorKind",
    "haptic_category",
    "manual_device",
]
