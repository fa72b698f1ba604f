from __future__ import annotations

import asyncio
import json

from aiohttp import web
from aiohttp.test_utils import TestServer as FakeTV

from tvremote.config import ControlConfig
from tvremote.core import ControlService
from tvremote.core.transports import (
    SAMSUNG_REMOTE_PATH,
    LgTransport,
    SamsungTransport,
)
from tvremote.models import Device, HapticCategory, RemoteButton, VendorKind
from tvremote.storage import DeviceStore


def _device(kind: VendorKind, port: int, host: str = "127.0.0.1") -> Device:
    return Device(name=f"{kind.value} test", host=host, port=port, kind=kind)


async def _eventually(predicate, timeout: float = 2.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


def _roku_app(hits: list[str], status: int = 200) -> web.Application:
    async def keypress(request: web.Request) -> web.Response:
        hits.append(request.match_info["key"])
        return web.Response(status=status)

    app = web.Application()
    app.router.add_post("/keypress/{key}", keypress)
    return app


def test_send_without_device_fails():
    service = ControlService()

    assert asyncio.run(service.send_command(RemoteButton.UP)) is False
    assert service.last_error == "no device connected"
    assert service.connected_device is None


def test_unknown_device_type_fails():
    async def _run():
        service = ControlService()
        await service.connect(_device(VendorKind.UNKNOWN, 1234))
        ok = await service.send_command(RemoteButton.UP)
        return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert service.last_error == "unknown device type"
    assert service.is_connected


def test_roku_keypress_and_haptics():
    hits: list[str] = []
    haptics: list[HapticCategory] = []

    async def _run():
        async with FakeTV(_roku_app(hits)) as server:
            service = ControlService(haptics=haptics.append)
            await service.connect(_device(VendorKind.ROKU, server.port))
            results = [
                await service.send_command(RemoteButton.VOLUME_UP),
                await service.send_command(RemoteButton.POWER),
                await service.send_command(RemoteButton.NUM_4),
            ]
            await service.disconnect()
            return service, results

    service, results = asyncio.run(_run())
    assert results == [True, True, True]
    assert hits == ["VolumeUp", "Power", "Lit_4"]
    assert haptics == [
        HapticCategory.SELECTION,
        HapticCategory.HEAVY,
        HapticCategory.LIGHT,
    ]
    assert service.last_error is None


def test_roku_rejection_sets_last_error():
    hits: list[str] = []

    async def _run():
        async with FakeTV(_roku_app(hits, status=503)) as server:
            service = ControlService()
            await service.connect(_device(VendorKind.ROKU, server.port))
            ok = await service.send_command(RemoteButton.HOME)
            return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert hits == ["Home"]
    assert service.last_error == "Roku rejected Home (HTTP 503)"


def test_unreachable_roku_reports_network_error(closed_port):
    async def _run():
        service = ControlService(config=ControlConfig(http_timeout=1.0))
        await service.connect(_device(VendorKind.ROKU, closed_port))
        ok = await service.send_command(RemoteButton.UP)
        return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert service.last_error is not None
    assert service.last_error.startswith("Network error: ")


def test_connect_persists_and_reloads_device(tmp_path):
    store = DeviceStore(tmp_path)
    device = _device(VendorKind.ROKU, 8060, host="192.168.1.10")

    async def _run():
        service = ControlService(store=store)
        states = []
        service.subscribe(states.append)
        connected = await service.connect(device)
        await service.disconnect()
        return connected, states

    connected, states = asyncio.run(_run())

    assert connected.id == device.id
    assert connected.last_connected is not None
    assert states[0].is_connected is True
    assert states[-1].is_connected is False
    assert states[-1].connected_device == connected

    stored = store.load()
    assert stored is not None
    assert stored.id == device.id
    assert stored.last_connected == connected.last_connected

    reloaded = ControlService(store=store)
    assert reloaded.connected_device == stored
    assert reloaded.is_connected is False


def test_samsung_socket_reused_and_reopened_after_disconnect():
    received: list[dict] = []
    connections: list[web.WebSocketResponse] = []

    async def remote(request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        connections.append(ws)
        async for message in ws:
            received.append(json.loads(message.data))
        return ws

    app = web.Application()
    app.router.add_get(SAMSUNG_REMOTE_PATH, remote)

    async def _run():
        async with FakeTV(app) as server:
            config = ControlConfig(ws_ready_timeout=2.0)
            service = ControlService(config=config)
            await service.connect(_device(VendorKind.SAMSUNG, server.port))
            first = await service.send_command(RemoteButton.VOLUME_UP)
            second = await service.send_command(RemoteButton.SELECT)
            await _eventually(lambda: len(received) == 2)
            opened_before_disconnect = len(connections)

            await service.disconnect()
            third = await service.send_command(RemoteButton.BACK)
            await _eventually(lambda: len(received) == 3)
            await service.disconnect()
            return [first, second, third], opened_before_disconnect

    results, opened_before_disconnect = asyncio.run(_run())

    assert results == [True, True, True]
    assert opened_before_disconnect == 1
    assert len(connections) == 2
    assert received[0] == {
        "method": "ms.remote.control",
        "params": {
            "Cmd": "Click",
            "DataOfCmd": "KEY_VOLUP",
            "Option": "false",
            "TypeOfRemote": "SendRemoteKey",
        },
    }
    assert [msg["params"]["DataOfCmd"] for msg in received] == [
        "KEY_VOLUP",
        "KEY_ENTER",
        "KEY_RETURN",
    ]


def test_samsung_connect_failure(closed_port):
    async def _run():
        service = ControlService(config=ControlConfig(ws_ready_timeout=1.0))
        await service.connect(_device(VendorKind.SAMSUNG, closed_port))
        ok = await service.send_command(RemoteButton.UP)
        await service.disconnect()
        return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert service.last_error == "Failed to connect to Samsung TV"


def test_samsung_transport_url():
    transport = SamsungTransport(
        _device(VendorKind.SAMSUNG, 8001, host="192.168.1.20"), ControlConfig()
    )
    assert transport.url == (
        "ws://192.168.1.20:8001/api/v2/channels/samsung.remote.control"
    )
    assert transport.persistent
    assert not transport.is_open


def test_lg_roap_command():
    requests: list[tuple[str, str]] = []

    async def roap(request: web.Request) -> web.Response:
        requests.append((request.content_type, await request.text()))
        return web.Response(status=200)

    app = web.Application()
    app.router.add_post("/roap/api/command", roap)

    async def _run():
        async with FakeTV(app) as server:
            service = ControlService(config=ControlConfig(roap_port=server.port))
            await service.connect(_device(VendorKind.LG, 3000))
            return await service.send_command(RemoteButton.MUTE)

    assert asyncio.run(_run()) is True
    assert requests == [
        (
            "application/xml",
            '<?xml version="1.0" encoding="utf-8"?>'
            "<command><name>MUTE</name></command>",
        )
    ]


def test_lg_falls_back_to_websocket(closed_port):
    received: list[dict] = []

    async def socket_handler(request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        async for message in ws:
            received.append(json.loads(message.data))
        return ws

    app = web.Application()
    app.router.add_get("/", socket_handler)

    async def _run():
        async with FakeTV(app) as server:
            service = ControlService(config=ControlConfig(roap_port=closed_port))
            await service.connect(_device(VendorKind.LG, server.port))
            ok = await service.send_command(RemoteButton.CHANNEL_UP)
            await _eventually(lambda: bool(received))
            return ok

    assert asyncio.run(_run()) is True
    assert received == [{"type": "button", "name": "CHANNELUP"}]


def test_lg_unreachable_reports_websocket_error(closed_port):
    async def _run():
        service = ControlService(config=ControlConfig(roap_port=closed_port))
        await service.connect(_device(VendorKind.LG, closed_port))
        ok = await service.send_command(RemoteButton.UP)
        return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert service.last_error is not None
    assert service.last_error.startswith("WebSocket error: ")


def test_apple_tv_accepts_no_content():
    paths: list[str] = []

    async def ctrl(request: web.Request) -> web.Response:
        paths.append(request.path)
        return web.Response(status=204)

    app = web.Application()
    app.router.add_post("/ctrl-int/1/{command}", ctrl)

    async def _run():
        async with FakeTV(app) as server:
            service = ControlService()
            await service.connect(_device(VendorKind.APPLE_TV, server.port))
            return await service.send_command(RemoteButton.PLAY)

    assert asyncio.run(_run()) is True
    assert paths == ["/ctrl-int/1/play"]


def test_switching_devices_routes_to_new_target():
    first_hits: list[str] = []
    second_hits: list[str] = []

    async def _run():
        async with FakeTV(_roku_app(first_hits)) as first:
            async with FakeTV(_roku_app(second_hits)) as second:
                service = ControlService()
                await service.connect(_device(VendorKind.ROKU, first.port))
                await service.send_command(RemoteButton.UP)
                await service.connect(_device(VendorKind.ROKU, second.port))
                await service.send_command(RemoteButton.DOWN)

    asyncio.run(_run())
    assert first_hits == ["Up"]
    assert second_hits == ["Down"]


def test_ipv6_host_is_bracketed_in_urls():
    hits: list[str] = []

    async def _run():
        async with FakeTV(_roku_app(hits), host="::1") as server:
            service = ControlService()
            await service.connect(_device(VendorKind.ROKU, server.port, host="::1"))
            ok = await service.send_command(RemoteButton.UP)
            return service, ok

    service, ok = asyncio.run(_run())
    assert ok is True, service.last_error
    assert hits == ["Up"]

    samsung = SamsungTransport(
        _device(VendorKind.SAMSUNG, 8001, host="fe80::1"), ControlConfig()
    )
    assert samsung.url == (
        "ws://[fe80::1]:8001/api/v2/channels/samsung.remote.control"
    )
    lg = LgTransport(_device(VendorKind.LG, 3000, host="fe80::1"), ControlConfig())
    assert lg.roap_url == "http://[fe80::1]:8080/roap/api/command"
    assert lg.ws_url == "ws://[fe80::1]:3000"


def test_lg_rejection_does_not_fall_back():
    sockets: list[str] = []

    async def roap(request: web.Request) -> web.Response:
        return web.Response(status=500)

    async def socket_handler(request: web.Request) -> web.Response:
        sockets.append(request.path)
        return web.Response(status=400)

    app = web.Application()
    app.router.add_post("/roap/api/command", roap)
    app.router.add_get("/", socket_handler)

    async def _run():
        async with FakeTV(app) as server:
            service = ControlService(config=ControlConfig(roap_port=server.port))
            await service.connect(_device(VendorKind.LG, server.port))
            ok = await service.send_command(RemoteButton.HOME)
            return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert service.last_error == "LG TV rejected HOME (HTTP 500)"
    assert sockets == []


def test_apple_tv_rejection_sets_last_error():
    async def ctrl(request: web.Request) -> web.Response:
        return web.Response(status=403)

    app = web.Application()
    app.router.add_post("/ctrl-int/1/{command}", ctrl)

    async def _run():
        async with FakeTV(app) as server:
            service = ControlService()
            await service.connect(_device(VendorKind.APPLE_TV, server.port))
            ok = await service.send_command(RemoteButton.PAUSE)
            return service, ok

    service, ok = asyncio.run(_run())
    assert ok is False
    assert service.last_error == "Apple TV rejected pause (HTTP 403)"


def test_failing_haptics_hook_does_not_fail_send():
    hits: list[str] = []

    def _broken_haptics(category: HapticCategory) -> None:
        raise RuntimeError("no vibration motor")

    async def _run():
        async with FakeTV(_roku_app(hits)) as server:
            service = ControlService(haptics=_broken_haptics)
            await service.connect(_device(VendorKind.ROKU, server.port))
            ok = await service.send_command(RemoteButton.SELECT)
            return service, ok

    service, ok = asyncio.run(_run())
    assert ok is True
    assert hits == ["Select"]
    assert service.last_error is None
