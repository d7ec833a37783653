from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import AttendanceStatus
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_utc_naive, to_utc_naive
from .model import CreateResult, StaffAttendanceRecord, StudentAttendanceRecord
from .repository import AttendanceRepository

_STUDENT_COLUMNS = "attendance_id, student_id, attendance_date, status, punch_time, device_id"
_STAFF_COLUMNS = (
    "attendance_id, teacher_id, attendance_date, status, punch_in_time, punch_out_time, late_minutes, device_id"
)


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _student_from_row(r: Dict[str, Any]) -> StudentAttendanceRecord:
    return StudentAttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        person_id=int(r["student_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        punch_time=from_utc_naive(r["punch_time"]),
        device_id=_optional_int(r.get("device_id")),
    )


def _staff_from_row(r: Dict[str, Any]) -> StaffAttendanceRecord:
    return StaffAttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        person_id=int(r["teacher_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        punch_in_time=from_utc_naive(r["punch_in_time"]),
        punch_out_time=from_utc_naive(r.get("punch_out_time")),
        late_minutes=int(r.get("late_minutes") or 0),
        device_id=_optional_int(r.get("device_id")),
    )


def _insert_or_duplicate(cur, sql: str, params: tuple) -> bool:
    """Run an INSERT; return False instead of raising when the day row already exists.

    A duplicate-key failure only rolls back the statement, so the transaction
    can go on to read the committed winner.
    """

    try:
        cur.execute(sql, params)
    except mysql.connector.IntegrityError as exc:
        if exc.errno != errorcode.ER_DUP_ENTRY:
            raise
        return False
    return True


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_student_record(self, person_id: int, attendance_date: date) -> Optional[StudentAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_STUDENT_COLUMNS}
                FROM student_attendance
                WHERE student_id=%s AND attendance_date=%s
                """,
                (person_id, attendance_date),
            )
            r = fetchone(cur)
            return _student_from_row(r) if r else None

    def create_student_record_if_absent(
        self,
        *,
        person_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        punch_time: datetime,
        device_id: Optional[int] = None,
    ) -> CreateResult:
        with db_cursor(self._conn_factory) as (_, cur):
            created = _insert_or_duplicate(
                cur,
                """
                INSERT INTO student_attendance(student_id, attendance_date, status, punch_time, device_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (person_id, attendance_date, status.value, to_utc_naive(punch_time), device_id),
            )
            cur.execute(
                f"""
                SELECT {_STUDENT_COLUMNS}
                FROM student_attendance
                WHERE student_id=%s AND attendance_date=%s
                """,
                (person_id, attendance_date),
            )
            r = fetchone(cur)
            if not r:
                raise StoreError(f"Student attendance row vanished for {person_id} on {attendance_date}")
            return CreateResult(created=created, record=_student_from_row(r))

    def get_staff_record(self, person_id: int, attendance_date: date) -> Optional[StaffAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_STAFF_COLUMNS}
                FROM teacher_attendance
                WHERE teacher_id=%s AND attendance_date=%s
                """,
                (person_id, attendance_date),
            )
            r = fetchone(cur)
            return _staff_from_row(r) if r else None

    def create_staff_record_if_absent(
        self,
        *,
        person_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        punch_in_time: datetime,
        late_minutes: int,
        device_id: Optional[int] = None,
    ) -> CreateResult:
        with db_cursor(self._conn_factory) as (_, cur):
            created = _insert_or_duplicate(
                cur,
                """
                INSERT INTO teacher_attendance(teacher_id, attendance_date, status, punch_in_time, late_minutes, device_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (person_id, attendance_date, status.value, to_utc_naive(punch_in_time), int(late_minutes), device_id),
            )
            cur.execute(
                f"""
                SELECT {_STAFF_COLUMNS}
                FROM teacher_attendance
                WHERE teacher_id=%s AND attendance_date=%s
                """,
                (person_id, attendance_date),
            )
            r = fetchone(cur)
            if not r:
                raise StoreError(f"Teacher attendance row vanished for {person_id} on {attendance_date}")
            return CreateResult(created=created, record=_staff_from_row(r))

    def set_punch_out_if_unset(self, *, attendance_id: int, punch_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE teacher_attendance
                SET punch_out_time=%s
                WHERE attendance_id=%s AND punch_out_time IS NULL
                """,
                (to_utc_naive(punch_out_time), int(attendance_id)),
            )
            return cur.rowcount > 0
