from __future__ import annotations

from .commands import COMMAND_TABLES, command
from .control import ControlService, ControlState
from .discovery import DiscoveryCoordinator, DiscoveryState
from .mdns import SERVICE_TYPES, ServiceDiscoveryScanner
from .ssdp import SSDPScanner, parse_ssdp_response
from .transports import Transport, register_transport, transport_for

__all__ = [
    "COMMAND_TABLES",
    "SERVICE_TYPES",
    "ControlService",
    "ControlState",
    "DiscoveryCoordinator",
    "DiscoveryState",
    "SSDPScanner",
    "ServiceDiscoveryScanner",
    "Transport",
    "command",
    "parse_ssdp_response",
    "register_transport",
    "transport_for",
]
