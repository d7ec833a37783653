from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Device:
    """A registered card reader."""

    device_id: int
    device_name: str
    ip_address: str
