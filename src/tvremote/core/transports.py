"""Per-vendor wire exchanges for remote key presses.

Each ``Transport`` subclass talks one vendor protocol and is registered for
its ``VendorKind``; ``transport_for`` picks the right one for a device.
Failures are raised as ``TransportError`` carrying a user-facing message.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

import aiohttp

from tvremote.config import ControlConfig
from tvremote.exceptions import TransportError
from tvremote.models import Device, VendorKind

logger = logging.getLogger(__name__)

SAMSUNG_REMOTE_PATH = "/api/v2/channels/samsung.remote.control"
ROAP_COMMAND_PATH = "/roap/api/command"

_REGISTRY: dict[VendorKind, type[Transport]] = {}


def register_transport(
    kind: VendorKind,
) -> Callable[[type[Transport]], type[Transport]]:
    def _register(cls: type[Transport]) -> type[Transport]:
        _REGISTRY[kind] = cls
        return cls

    return _register


def transport_for(device: Device, config: ControlConfig | None = None) -> Transport:
    """Build the transport for ``device``.

    Raises ``TransportError`` when no protocol is known for its vendor.
    """
    try:
        cls = _REGISTRY[device.kind]
    except KeyError:
        raise TransportError("unknown device type") from None
    return cls(device, config or ControlConfig())


class Transport(ABC):
    """One connected device's command channel."""

    persistent = False

    def __init__(self, device: Device, config: ControlConfig) -> None:
        self.device = device
        self.config = config

    @property
    def kind(self) -> VendorKind:
        return self.device.kind

    async def open(self) -> None:
        """Open a long-lived connection, for protocols that keep one."""

    async def close(self) -> None:
        """Release anything ``open`` or ``send`` left behind."""

    @abstractmethod
    async def send(self, token: str) -> None:
        """Deliver one key token or raise ``TransportError``."""

    def _netloc(self, port: int | None = None) -> str:
        """``host:port`` for URLs, with IPv6 literals in brackets."""
        host = self.device.host
        if ":" in host:
            host = f"[{host}]"
        return f"{host}:{self.device.port if port is None else port}"

    def _http_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.config.http_timeout)

    async def _post(
        self,
        url: str,
        *,
        data: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> int:
        async with aiohttp.ClientSession(timeout=self._http_timeout()) as session:
            async with session.post(url, data=data, headers=headers) as response:
                await response.read()
                return response.status


@register_transport(VendorKind.ROKU)
class EcpTransport(Transport):
    """Roku External Control Protocol: one POST per key press."""

    async def send(self, token: str) -> None:
        url = f"http://{self._netloc()}/keypress/{token}"
        try:
            status = await self._post(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Network error: {_describe(exc)}") from exc
        if status != 200:
            raise TransportError(f"Roku rejected {token} (HTTP {status})")


@register_transport(VendorKind.SAMSUNG)
class SamsungTransport(Transport):
    """Samsung remote channel over a WebSocket kept open between key presses.

    Not safe for overlapping ``send`` calls; callers send one key at a time.
    """

    persistent = True

    def __init__(self, device: Device, config: ControlConfig) -> None:
        super().__init__(device, config)
        self._session: aiohttp.ClientSession | None = None
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._connecting: asyncio.Task[None] | None = None

    @property
    def url(self) -> str:
        return f"ws://{self._netloc()}{SAMSUNG_REMOTE_PATH}"

    @property
    def is_open(self) -> bool:
        return self._ws is not None and not self._ws.closed

    async def open(self) -> None:
        if self.is_open:
            return
        if self._connecting is None or self._connecting.done():
            self._connecting = asyncio.create_task(self._connect())
        await asyncio.shield(self._connecting)

    async def _connect(self) -> None:
        await self._drop_socket()
        logger.debug("Opening Samsung remote socket %s", self.url)
        session = aiohttp.ClientSession(timeout=self._http_timeout())
        try:
            ws = await session.ws_connect(self.url)
        except BaseException:
            await session.close()
            raise
        self._session = session
        self._ws = ws
        logger.info("Samsung remote socket open to %s", self.device.host)

    async def send(self, token: str) -> None:
        if not self.is_open:
            ready_timeout = self.config.ws_ready_timeout
            try:
                await asyncio.wait_for(self.open(), timeout=ready_timeout)
            except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
                logger.debug("Samsung connect failed: %s", _describe(exc))
                raise TransportError("Failed to connect to Samsung TV") from exc

        ws = self._ws
        if ws is None:
            raise TransportError("Failed to connect to Samsung TV")
        payload = {
            "method": "ms.remote.control",
            "params": {
                "Cmd": "Click",
                "DataOfCmd": token,
                "Option": "false",
                "TypeOfRemote": "SendRemoteKey",
            },
        }
        try:
            await ws.send_str(json.dumps(payload))
        except (aiohttp.ClientError, ConnectionError, RuntimeError) as exc:
            await self._drop_socket()
            raise TransportError(f"Failed to send command: {_describe(exc)}") from exc

    async def close(self) -> None:
        connecting, self._connecting = self._connecting, None
        if connecting is not None and not connecting.done():
            connecting.cancel()
            await asyncio.gather(connecting, return_exceptions=True)
        await self._drop_socket()

    async def _drop_socket(self) -> None:
        ws, self._ws = self._ws, None
        session, self._session = self._session, None
        if ws is not None:
            await ws.close()
            logger.debug("Samsung remote socket closed")
        if session is not None:
            await session.close()


@register_transport(VendorKind.LG)
class LgTransport(Transport):
    """LG webOS: ROAP HTTP command, falling back to a one-off WebSocket."""

    @property
    def roap_url(self) -> str:
        return f"http://{self._netloc(self.config.roap_port)}{ROAP_COMMAND_PATH}"

    @property
    def ws_url(self) -> str:
        return f"ws://{self._netloc()}"

    async def send(self, token: str) -> None:
        body = (
            '<?xml version="1.0" encoding="utf-8"?>'
            f"<command><name>{token}</name></command>"
        )
        try:
            status = await self._post(
                self.roap_url,
                data=body,
                headers={"Content-Type": "application/xml"},
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.debug("ROAP request failed (%s), trying WebSocket", _describe(exc))
            await self._send_ws(token)
            return
        if status != 200:
            raise TransportError(f"LG TV rejected {token} (HTTP {status})")

    async def _send_ws(self, token: str) -> None:
        message = json.dumps({"type": "button", "name": token})
        try:
            async with aiohttp.ClientSession(timeout=self._http_timeout()) as session:
                async with session.ws_connect(self.ws_url) as ws:
                    await ws.send_str(message)
        except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError) as exc:
            raise TransportError(f"WebSocket error: {_describe(exc)}") from exc


@register_transport(VendorKind.APPLE_TV)
class DacpTransport(Transport):
    """Apple TV ``ctrl-int`` calls; assumes the device is already paired."""

    async def send(self, token: str) -> None:
        url = f"http://{self._netloc()}/ctrl-int/1/{token}"
        try:
            status = await self._post(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Apple TV error: {_describe(exc)}") from exc
        if status not in (200, 204):
            raise TransportError(f"Apple TV rejected {token} (HTTP {status})")


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
