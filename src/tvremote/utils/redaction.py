from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field


@dataclass
class Redactor:
    """Masks addresses and serial numbers in output meant for sharing.

    The same serial always maps to the same placeholder within one run, so
    rows can still be told apart.
    """

    enabled: bool = True
    _serials: dict[str, str] = field(default_factory=dict)

    def redact_host(self, host: str) -> str:
        if not self.enabled:
            return host
        try:
            address = ipaddress.ip_address(host)
        except ValueError:
            return "<hostname>"
        if address.version == 4:
            return "x.x.x." + host.rsplit(".", 1)[1]
        return "x:…:" + address.exploded.rsplit(":", 1)[1]

    def redact_serial(self, serial: str | None) -> str:
        if serial is None:
            return ""
        if not self.enabled:
            return serial
        if serial not in self._serials:
            self._serials[serial] = f"serial-{len(self._serials) + 1:02d}"
        return self._serials[serial]
