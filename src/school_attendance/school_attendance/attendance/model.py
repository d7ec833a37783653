from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class StudentAttendanceRecord:
    """Domain entity: a student's attendance for one day. Never revised."""

    attendance_id: int
    person_id: int
    attendance_date: date
    status: AttendanceStatus
    punch_time: datetime
    device_id: Optional[int] = None


@dataclass(frozen=True)
class StaffAttendanceRecord:
    """Domain entity: a staff member's attendance for one day.

    ``punch_out_time`` is the only field that may change after creation, and
    only from unset to set.
    """

    attendance_id: int
    person_id: int
    attendance_date: date
    status: AttendanceStatus
    punch_in_time: datetime
    punch_out_time: Optional[datetime] = None
    late_minutes: int = 0
    device_id: Optional[int] = None


AttendanceRecord = Union[StudentAttendanceRecord, StaffAttendanceRecord]


@dataclass(frozen=True)
class CreateResult:
    """Outcome of an insert-or-fetch: ``created`` is False when another punch got there first."""

    created: bool
    record: AttendanceRecord
