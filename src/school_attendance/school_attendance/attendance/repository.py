from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ..core.enums import AttendanceStatus
from .model import CreateResult, StaffAttendanceRecord, StudentAttendanceRecord


class AttendanceRepository(Protocol):
    """Per-person-per-day attendance store.

    The create and punch-out methods must be atomic with respect to the
    (person, date) uniqueness: this is what enforces first-punch-wins, since
    callers only ever classify against a snapshot.
    """

    def get_student_record(self, person_id: int, attendance_date: date) -> Optional[StudentAttendanceRecord]:
        raise NotImplementedError

    def create_student_record_if_absent(
        self,
        *,
        person_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        punch_time: datetime,
        device_id: Optional[int] = None,
    ) -> CreateResult:
        raise NotImplementedError

    def get_staff_record(self, person_id: int, attendance_date: date) -> Optional[StaffAttendanceRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_punch_out_if_unset(self, *, attendance_id: int, punch_out_time: datetime) -> bool:
        """Set punch-out only if it is still empty. Returns True if this call set it."""

        raise NotImplementedError
