from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Mapping

from zeroconf import (
    BadTypeInNameException,
    IPVersion,
    ServiceBrowser,
    ServiceInfo,
    ServiceListener,
    Zeroconf,
)

from tvremote.models import Device, VendorKind

logger = logging.getLogger(__name__)

SERVICE_TYPES: dict[str, VendorKind] = {
    "_roku._tcp.local.": VendorKind.ROKU,
    "_samsung._tcp.local.": VendorKind.SAMSUNG,
    "_airplay._tcp.local.": VendorKind.APPLE_TV,
    "_lgssdp._tcp.local.": VendorKind.LG,
    "_webos._tcp.local.": VendorKind.LG,
}

DeviceCallback = Callable[[Device], None]
ErrorCallback = Callable[[str], None]


def _txt_value(properties: dict[bytes, bytes | None], *keys: str) -> str | None:
    """First non-empty TXT record value among ``keys``."""
    for key in keys:
        raw = properties.get(key.encode())
        if raw:
            return raw.decode("utf-8", errors="replace")
    return None


def _preferred_address(info: ServiceInfo) -> str | None:
    # Prefer IPv4.
    ipv4 = info.parsed_addresses(IPVersion.V4Only)
    if ipv4:
        return ipv4[0]
    addresses = info.parsed_addresses()
    return addresses[0] if addresses else None


def _strip_service_suffix(name: str, type_: str) -> str:
    suffix = f".{type_}"
    if name.endswith(suffix):
        return name[: -len(suffix)]
    return name.rstrip(".")


def device_from_service_info(
    info: ServiceInfo, service_name: str, type_: str, kinds: Mapping[str, VendorKind]
) -> Device | None:
    host = _preferred_address(info)
    if host is None or info.port is None:
        return None

    name = _strip_service_suffix(service_name, type_)

    return Device(
        name=name or host,
        host=host,
        port=info.port,
        kind=kinds.get(type_, VendorKind.UNKNOWN),
        model_name=_txt_value(info.properties, "model", "md"),
    )


class TVServiceListener(ServiceListener):
    """Resolve browsed services and forward them as candidate devices.

    Callbacks arrive on the zeroconf thread. ``close()`` takes the same lock
    used while emitting, so nothing is delivered once it has returned.
    """

    def __init__(
        self,
        on_device: DeviceCallback,
        resolve_timeout: float,
        kinds: Mapping[str, VendorKind] = SERVICE_TYPES,
    ) -> None:
        self._on_device = on_device
        self._resolve_timeout_ms = max(int(resolve_timeout * 1000), 1)
        self._kinds = kinds
        self._lock = threading.Lock()
        self._closed = False

    def add_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        if self._closed:
            return
        info = zc.get_service_info(type_, name, timeout=self._resolve_timeout_ms)
        if not info:
            logger.debug("Could not resolve %s", name)
            return
        device = device_from_service_info(info, name, type_, self._kinds)
        if device is None:
            return
        with self._lock:
            if self._closed:
                return
            logger.debug(
                "Discovered %s '%s' at %s:%d via mDNS",
                device.kind.value,
                device.name,
                device.host,
                device.port,
            )
            self._on_device(device)

    def update_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        self.add_service(zc, type_, name)

    def remove_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        pass

    def close(self) -> None:
        with self._lock:
            self._closed = True


class ServiceDiscoveryScanner:
    """Browse every TV service type on one shared zeroconf instance."""

    def __init__(
        self,
        on_device: DeviceCallback,
        on_error: ErrorCallback,
        service_types: Mapping[str, VendorKind] = SERVICE_TYPES,
        resolve_timeout: float = 3.0,
        zeroconf_factory: Callable[[], Zeroconf] = Zeroconf,
    ) -> None:
        self._on_device = on_device
        self._on_error = on_error
        self._service_types = service_types
        self._resolve_timeout = resolve_timeout
        self._zeroconf_factory = zeroconf_factory
        self._zeroconf: Zeroconf | None = None
        self._listener: TVServiceListener | None = None
        self._browsers: list[ServiceBrowser] = []

    @property
    def is_running(self) -> bool:
        return self._zeroconf is not None

    async def start(self) -> None:
        if self.is_running:
            return
        try:
            zeroconf = await asyncio.to_thread(self._zeroconf_factory)
        except OSError as exc:
            logger.warning("mDNS unavailable: %s", exc)
            self._on_error(f"Bonjour error: {exc}")
            return

        self._zeroconf = zeroconf
        self._listener = TVServiceListener(
            self._on_device, self._resolve_timeout, self._service_types
        )
        for service_type in self._service_types:
            try:
                browser = ServiceBrowser(zeroconf, service_type, self._listener)
            except BadTypeInNameException as exc:
                logger.warning("Cannot browse %s: %s", service_type, exc)
                self._on_error(f"Bonjour error: {exc}")
                continue
            self._browsers.append(browser)
            logger.debug("Browsing %s", service_type)

    async def stop(self) -> None:
        if self._listener is not None:
            self._listener.close()
            self._listener = None
        zeroconf, self._zeroconf = self._zeroconf, None
        browsers, self._browsers = self._browsers, []
        if zeroconf is None:
            return

        def _shutdown() -> None:
            for browser in browsers:
                browser.cancel()
            zeroconf.close()

        await asyncio.to_thread(_shutdown)
