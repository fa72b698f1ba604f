from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

import aiohttp

from tvremote.config import ControlConfig
from tvremote.exceptions import StoreError, TransportError
from tvremote.models import Device, HapticCategory, RemoteButton, haptic_category
from tvremote.storage import DeviceStore

from .commands import command
from .events import Observable
from .transports import Transport, transport_for

logger = logging.getLogger(__name__)

HapticsHook = Callable[[HapticCategory], None]
TransportFactory = Callable[[Device, ControlConfig], Transport]


@dataclass(frozen=True)
class ControlState:
    connected_device: Device | None = None
    is_connected: bool = False
    last_error: str | None = None


class ControlService(Observable[ControlState]):
    """Send remote key presses to the one device currently connected.

    The service owns the transport for that device, including the Samsung
    WebSocket, and tears it down on ``disconnect`` or when another device is
    connected. Key presses must be sent one at a time.
    """

    def __init__(
        self,
        store: DeviceStore | None = None,
        config: ControlConfig | None = None,
        haptics: HapticsHook | None = None,
        transport_factory: TransportFactory = transport_for,
    ) -> None:
        super().__init__()
        self._store = store
        self._config = config or ControlConfig()
        self._haptics = haptics
        self._transport_factory = transport_factory
        self._lock = asyncio.Lock()
        self._device: Device | None = store.load() if store is not None else None
        self._connected = False
        self._last_error: str | None = None
        self._transport: Transport | None = None
        self._opening: asyncio.Task[None] | None = None

    @property
    def state(self) -> ControlState:
        return ControlState(
            connected_device=self._device,
            is_connected=self._connected,
            last_error=self._last_error,
        )

    @property
    def connected_device(self) -> Device | None:
        return self._device

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def last_error(self) -> str | None:
        return self._last_error

    async def connect(self, device: Device) -> Device:
        """Make ``device`` the target of future commands and remember it."""
        async with self._lock:
            await self._release_transport()

            connected = device.model_copy(
                update={"last_connected": datetime.now(timezone.utc)}
            )
            self._device = connected
            self._connected = True
            self._last_error = None

            if self._store is not None:
                try:
                    self._store.save(connected)
                except StoreError as exc:
                    logger.warning("%s", exc)

            try:
                transport = self._transport_factory(connected, self._config)
            except TransportError:
                transport = None
            if transport is not None and transport.persistent:
                self._transport = transport
                self._opening = asyncio.create_task(self._open_quietly(transport))

        logger.info(
            "Connected to %s '%s' at %s:%d",
            connected.kind.value,
            connected.name,
            connected.host,
            connected.port,
        )
        self._publish(self.state)
        return connected

    async def disconnect(self) -> None:
        async with self._lock:
            await self._release_transport()
            was_connected, self._connected = self._connected, False
        if was_connected:
            logger.info("Disconnected")
        self._publish(self.state)

    async def send_command(self, button: RemoteButton) -> bool:
        """Send ``button`` to the connected device.

        Returns False and sets ``last_error`` when it could not be delivered.
        """
        device = self._device
        if device is None:
            return self._fail("no device connected")

        token = command(button, device.kind)
        try:
            transport = await self._transport_for(device)
            await transport.send(token)
        except TransportError as exc:
            return self._fail(str(exc))

        logger.debug("Sent %s (%s) to %s", button.value, token, device.host)
        if self._haptics is not None:
            try:
                self._haptics(haptic_category(button))
            except Exception:
                logger.exception("Haptics hook %r failed", self._haptics)
        return True

    async def _transport_for(self, device: Device) -> Transport:
        async with self._lock:
            if self._transport is None or self._transport.device is not device:
                await self._release_transport()
                self._transport = self._transport_factory(device, self._config)
            return self._transport

    async def _release_transport(self) -> None:
        opening, self._opening = self._opening, None
        if opening is not None and not opening.done():
            opening.cancel()
            await asyncio.gather(opening, return_exceptions=True)

        transport, self._transport = self._transport, None
        if transport is not None:
            await transport.close()

    async def _open_quietly(self, transport: Transport) -> None:
        # Failures surface on the next send, which reconnects.
        try:
            await transport.open()
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
            logger.debug("Could not open %s connection: %s", transport.kind.value, exc)

    def _fail(self, message: str) -> bool:
        self._last_error = message
        logger.warning("Command failed: %s", message)
        self._publish(self.state)
        return False
