from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from tvremote.exceptions import StoreError
from tvremote.models import Device

logger = logging.getLogger(__name__)

LAST_DEVICE_FILE = "last_device.json"


class DeviceStore:
    """Single-slot store for the most recently connected device."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._last_device_path = data_dir / LAST_DEVICE_FILE

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def last_device_path(self) -> Path:
        return self._last_device_path

    def save(self, device: Device) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._last_device_path.write_text(device.model_dump_json(indent=2))
        except OSError as exc:
            raise StoreError(
                f"Could not save device to {self._last_device_path}: {exc}"
            ) from exc

    def load(self) -> Device | None:
        if not self._last_device_path.exists():
            return None

        try:
            return Device.model_validate_json(self._last_device_path.read_text())
        except (OSError, ValidationError) as exc:
            logger.warning(
                "Ignoring unreadable device file %s: %s", self._last_device_path, exc
            )
            return None

    def clear(self) -> None:
        self._last_device_path.unlink(missing_ok=True)
