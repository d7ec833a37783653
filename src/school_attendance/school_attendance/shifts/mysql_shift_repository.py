from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, late_threshold_time, absent_cutoff_time
                FROM shifts
                WHERE shift_id=%s
                """,
                (shift_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Shift(
                shift_id=int(r["shift_id"]),
                shift_name=r["shift_name"],
                start_time=normalize_mysql_time(r["start_time"]),
                late_threshold_time=normalize_mysql_time(r.get("late_threshold_time")),
                absent_cutoff_time=normalize_mysql_time(r.get("absent_cutoff_time")),
            )
