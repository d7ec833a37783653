from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Device
from .repository import DeviceRepository


class MySQLDeviceRepository(DeviceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_ip(self, ip_address: str) -> Optional[Device]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT device_id, device_name, ip_address FROM devices WHERE ip_address=%s",
                (ip_address,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Device(
                device_id=int(r["device_id"]),
                device_name=r["device_name"],
                ip_address=r["ip_address"],
            )
