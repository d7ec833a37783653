from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import StoreError
from .repository import DeviceRepository

logger = logging.getLogger(__name__)


class DeviceLookup:
    """Best-effort mapping from a reader's address to its device id."""

    def __init__(self, devices: DeviceRepository):
        self._devices = devices

    def resolve(self, ip_address: Optional[str]) -> Optional[int]:
        if not ip_address:
            return None
        try:
            device = self._devices.get_by_ip(ip_address)
        except StoreError:
            logger.warning("Device lookup failed for %s; continuing without device id", ip_address, exc_info=True)
            return None
        if device is None:
            logger.info("Punch from unregistered device address %s", ip_address)
            return None
        return device.device_id
