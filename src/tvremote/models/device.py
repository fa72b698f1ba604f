from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class VendorKind(str, Enum):
    ROKU = "Roku"
    SAMSUNG = "Samsung"
    LG = "LG webOS"
    APPLE_TV = "Apple TV"
    UNKNOWN = "Unknown"

    @property
    def default_port(self) -> int:
        return DEFAULT_PORTS[self]


DEFAULT_PORTS: dict[VendorKind, int] = {
    VendorKind.ROKU: 8060,
    VendorKind.SAMSUNG: 8001,
    VendorKind.LG: 3000,
    VendorKind.APPLE_TV: 7000,
    VendorKind.UNKNOWN: 0,
}


class Device(BaseModel):
    """A TV reachable on the local network.

    Devices sharing the same ``(host, port)`` address are treated as the same
    device when discovery results are merged, whatever their name or id.
    """

    model_config = {"extra": "forbid"}

    id: UUID = Field(default_factory=uuid4)
    name: str
    host: str
    port: int = Field(ge=0, le=65535)
    kind: VendorKind = VendorKind.UNKNOWN
    model_name: str | None = None
    serial_number: str | None = None
    last_connected: datetime | None = None

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)


def manual_device(host: str, kind: VendorKind, port: int | None = None) -> Device:
    """Build a device record for an address typed in by the user."""
    return Device(
        name=f"{kind.value} ({host})",
        host=host,
        port=kind.default_port if port is None else port,
        kind=kind,
    )
