from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, to_utc_naive
from .model import PunchEvent
from .repository import PunchLogRepository


class MySQLPunchLogRepository(PunchLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, event: PunchEvent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punch_logs(person_id, person_type, punch_date, punch_time, device_id, card_number)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.person_id,
                    event.person_kind.wire_name,
                    event.punch_date,
                    to_utc_naive(event.punch_time),
                    event.device_id,
                    event.card_number,
                ),
            )
            return int(cur.lastrowid)
