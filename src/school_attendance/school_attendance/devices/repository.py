from __future__ import annotations

from typing import Optional, Protocol

from .model import Device


class DeviceRepository(Protocol):
    def get_by_ip(self, ip_address: str) -> Optional[Device]:
        raise NotImplementedError
