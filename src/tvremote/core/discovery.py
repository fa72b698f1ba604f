from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field

from tvremote.config import DiscoveryConfig
from tvremote.models import Device

from .events import Observable
from .mdns import ServiceDiscoveryScanner
from .ssdp import SSDPScanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveryState:
    is_scanning: bool = False
    devices: tuple[Device, ...] = field(default_factory=tuple)
    last_error: str | None = None


class DiscoveryCoordinator(Observable[DiscoveryState]):
    """Run SSDP and mDNS discovery together and merge what they find.

    The discovered list never holds two devices with the same ``(host, port)``;
    the first one seen is kept as-is. Both scanners report through
    ``add_device`` and ``report_error``, possibly from the zeroconf thread, so
    every mutation happens under ``_lock``.

    Idle --start()--> Scanning --stop() or scan timeout--> Idle
    """

    def __init__(
        self,
        config: DiscoveryConfig | None = None,
        ssdp: SSDPScanner | None = None,
        mdns: ServiceDiscoveryScanner | None = None,
    ) -> None:
        super().__init__()
        self._config = config or DiscoveryConfig()
        self._ssdp = ssdp or SSDPScanner(
            self.add_device,
            self.report_error,
            search_targets=self._config.search_targets,
            listen_window=self._config.ssdp_window,
        )
        self._mdns = mdns or ServiceDiscoveryScanner(
            self.add_device,
            self.report_error,
            resolve_timeout=self._config.resolve_timeout,
        )
        self._lock = threading.Lock()
        self._devices: list[Device] = []
        self._last_error: str | None = None
        self._scanning = False
        self._timer: asyncio.Task[None] | None = None
        self._mdns_start: asyncio.Task[None] | None = None
        self._transition = asyncio.Lock()
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def state(self) -> DiscoveryState:
        with self._lock:
            return self._snapshot()

    @property
    def is_scanning(self) -> bool:
        return self._scanning

    @property
    def devices(self) -> list[Device]:
        with self._lock:
            return list(self._devices)

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def _snapshot(self) -> DiscoveryState:
        return DiscoveryState(
            is_scanning=self._scanning,
            devices=tuple(self._devices),
            last_error=self._last_error,
        )

    def add_device(self, candidate: Device) -> bool:
        """Record ``candidate`` unless a device with its address is known."""
        with self._lock:
            if any(d.address == candidate.address for d in self._devices):
                logger.debug(
                    "Skipping duplicate %s at %s:%d",
                    candidate.name,
                    candidate.host,
                    candidate.port,
                )
                return False
            self._devices.append(candidate)
            state = self._snapshot()
        logger.info(
            "Found %s '%s' at %s:%d",
            candidate.kind.value,
            candidate.name,
            candidate.host,
            candidate.port,
        )
        self._publish(state)
        return True

    def report_error(self, message: str) -> None:
        with self._lock:
            self._last_error = message
            state = self._snapshot()
        self._publish(state)

    async def start(self) -> None:
        async with self._transition:
            if self._scanning:
                return
            self._begin()

    def _begin(self) -> None:
        with self._lock:
            self._scanning = True
            self._devices.clear()
            self._last_error = None
            state = self._snapshot()
        self._idle.clear()
        logger.info("Starting discovery (timeout=%.1fs)", self._config.scan_timeout)
        self._publish(state)

        self._ssdp.start()
        self._mdns_start = asyncio.create_task(self._mdns.start())
        self._timer = asyncio.create_task(self._stop_after(self._config.scan_timeout))

    async def stop(self) -> None:
        async with self._transition:
            if not self._scanning:
                return
            await self._end()

    async def _end(self) -> None:
        with self._lock:
            self._scanning = False

        timer, self._timer = self._timer, None
        if timer is not None and timer is not asyncio.current_task():
            timer.cancel()
            await asyncio.gather(timer, return_exceptions=True)

        mdns_start, self._mdns_start = self._mdns_start, None
        if mdns_start is not None:
            (result,) = await asyncio.gather(mdns_start, return_exceptions=True)
            if isinstance(result, Exception):
                logger.warning("mDNS browse failed: %s", result)
                self.report_error(f"Bonjour error: {result}")

        await asyncio.gather(self._ssdp.stop(), self._mdns.stop())
        state = self.state
        logger.info("Discovery stopped: %d device(s)", len(state.devices))
        self._idle.set()
        self._publish(state)

    async def wait(self) -> None:
        """Block until the current scan has stopped."""
        await self._idle.wait()

    async def scan(self) -> list[Device]:
        """Run a full scan and return the discovered devices."""
        await self.start()
        try:
            await self.wait()
        finally:
            await self.stop()
        return self.devices

    async def _stop_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        logger.debug("Scan timeout reached after %.1fs", delay)
        await self.stop()
