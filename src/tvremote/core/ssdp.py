from __future__ import annotations

import asyncio
import logging
import socket
from collections.abc import Callable, Iterable
from urllib.parse import urlsplit

from tvremote.config import DEFAULT_SEARCH_TARGETS
from tvremote.models import Device, VendorKind

logger = logging.getLogger(__name__)

SSDP_GROUP = "239.255.255.250"
SSDP_PORT = 1900
SSDP_MX = 3
LISTEN_WINDOW = 5.0

DeviceCallback = Callable[[Device], None]
ErrorCallback = Callable[[str], None]

_DEFAULT_NAMES = {
    VendorKind.ROKU: "Roku Device",
    VendorKind.SAMSUNG: "Samsung TV",
    VendorKind.LG: "LG TV",
}


def build_search_request(search_target: str) -> bytes:
    return (
        "M-SEARCH * HTTP/1.1\r\n"
        f"HOST: {SSDP_GROUP}:{SSDP_PORT}\r\n"
        'MAN: "ssdp:discover"\r\n'
        f"MX: {SSDP_MX}\r\n"
        f"ST: {search_target}\r\n"
        "\r\n"
    ).encode("utf-8")


def parse_headers(payload: str) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in payload.split("\r\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        headers[key.strip().upper()] = value.strip()
    return headers


def classify(headers: dict[str, str]) -> VendorKind:
    # USN is checked first and wins over whatever ST/SERVER suggest.
    if "roku" in headers.get("USN", "").lower():
        return VendorKind.ROKU

    st = headers.get("ST", "").lower()
    if "roku" in st:
        return VendorKind.ROKU
    if "dial" in st:
        server = headers.get("SERVER", "").lower()
        if "samsung" in server:
            return VendorKind.SAMSUNG
        if "lg" in server or "webos" in server:
            return VendorKind.LG
    return VendorKind.UNKNOWN


def parse_ssdp_response(payload: str) -> Device | None:
    """Turn an M-SEARCH reply into a candidate device.

    Replies without a usable ``LOCATION`` are dropped since there is no
    address to reach the device on.
    """
    headers = parse_headers(payload)
    location = headers.get("LOCATION")
    if not location:
        return None

    try:
        url = urlsplit(location)
        host = url.hostname
        port = url.port or 80
    except ValueError:
        return None
    if not host:
        return None

    kind = classify(headers)
    return Device(
        name=_DEFAULT_NAMES.get(kind, "Unknown TV"),
        host=host,
        port=port,
        kind=kind,
    )


class _SearchProtocol(asyncio.DatagramProtocol):
    def __init__(
        self, search_target: str, on_device: DeviceCallback, on_error: ErrorCallback
    ) -> None:
        self._search_target = search_target
        self._on_device = on_device
        self._on_error = on_error
        self.closed = False

    def datagram_received(self, data: bytes, addr: tuple[str, int]) -> None:
        if self.closed:
            return
        try:
            payload = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Ignoring undecodable SSDP reply from %s", addr[0])
            return
        device = parse_ssdp_response(payload)
        if device is None:
            logger.debug("Ignoring SSDP reply without LOCATION from %s", addr[0])
            return
        logger.debug(
            "SSDP %s: %s at %s:%d",
            self._search_target,
            device.kind.value,
            device.host,
            device.port,
        )
        self._on_device(device)

    def error_received(self, exc: Exception) -> None:
        if self.closed:
            return
        logger.warning("SSDP socket error for %s: %s", self._search_target, exc)
        self._on_error(f"SSDP error: {exc}")


class SSDPScanner:
    """Multicast M-SEARCH discovery, one socket per search target."""

    def __init__(
        self,
        on_device: DeviceCallback,
        on_error: ErrorCallback,
        search_targets: Iterable[str] = DEFAULT_SEARCH_TARGETS,
        listen_window: float = LISTEN_WINDOW,
        group: tuple[str, int] = (SSDP_GROUP, SSDP_PORT),
    ) -> None:
        self._on_device = on_device
        self._on_error = on_error
        self._search_targets = tuple(search_targets)
        self._listen_window = listen_window
        self._group = group
        self._protocols: set[_SearchProtocol] = set()
        self._transports: set[asyncio.DatagramTransport] = set()
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())

    async def wait(self) -> None:
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def stop(self) -> None:
        for protocol in self._protocols:
            protocol.closed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        for transport in list(self._transports):
            transport.close()
        self._transports.clear()
        self._protocols.clear()

    async def _run(self) -> None:
        await asyncio.gather(
            *(self._search(target) for target in self._search_targets)
        )

    async def _search(self, search_target: str) -> None:
        loop = asyncio.get_running_loop()
        protocol = _SearchProtocol(search_target, self._on_device, self._on_error)
        transport: asyncio.DatagramTransport | None = None
        try:
            transport, _ = await loop.create_datagram_endpoint(
                lambda: protocol,
                local_addr=("0.0.0.0", 0),
                family=socket.AF_INET,
            )
            self._protocols.add(protocol)
            self._transports.add(transport)
            sock = transport.get_extra_info("socket")
            if sock is not None:
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2)
            transport.sendto(build_search_request(search_target), self._group)
            logger.debug("Sent M-SEARCH for %s", search_target)
            await asyncio.sleep(self._listen_window)
        except OSError as exc:
            logger.warning("SSDP search for %s failed: %s", search_target, exc)
            self._on_error(f"SSDP error: {exc}")
        finally:
            protocol.closed = True
            self._protocols.discard(protocol)
            if transport is not None:
                self._transports.discard(transport)
                transport.close()
