from __future__ import annotations

from .store import LAST_DEVICE_FILE, DeviceStore

__all__ = ["LAST_DEVICE_FILE", "DeviceStore"]
