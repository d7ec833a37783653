from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from src.school_attendance.school_attendance.attendance.model import (
    CreateResult,
    StaffAttendanceRecord,
    StudentAttendanceRecord,
)
from src.school_attendance.school_attendance.attendance.service import PunchService
from src.school_attendance.school_attendance.cards.model import CardBinding
from src.school_attendance.school_attendance.cards.resolver import CardResolver
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, PersonKind
from src.school_attendance.school_attendance.core.exceptions import StoreError
from src.school_attendance.school_attendance.devices.model import Device
from src.school_attendance.school_attendance.devices.service import DeviceLookup
from src.school_attendance.school_attendance.people.model import Person
from src.school_attendance.school_attendance.punches.model import PunchEvent
from src.school_attendance.school_attendance.punches.service import PunchLogger
from src.school_attendance.school_attendance.shifts.model import Shift

DHAKA = ZoneInfo("Asia/Dhaka")
PUNCH_DAY = date(2026, 3, 2)

STUDENT_CARD = "0004567890"
STAFF_CARD = "0009876543"
READER_IP = "192.168.1.201"


def at(hour: int, minute: int, second: int = 0, *, day: date = PUNCH_DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=DHAKA)


@dataclass
class InMemoryCards:
    bindings: list[CardBinding]
    lookups: list[tuple[PersonKind, str]] = field(default_factory=list)

    def find_active(self, kind: PersonKind, card_number: str) -> Optional[CardBinding]:
        self.lookups.append((kind, card_number))
        for b in self.bindings:
            if b.person_kind is kind and b.card_number == card_number and b.is_active:
                return b
        return None


@dataclass
class InMemoryPeople:
    students: dict[int, Person]
    staff: dict[int, Person]

    def get_student(self, student_id: int) -> Optional[Person]:
        return self.students.get(student_id)

    def get_staff(self, teacher_id: int) -> Optional[Person]:
        return self.staff.get(teacher_id)


@dataclass
class InMemoryShifts:
    shifts: dict[int, Shift]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)


@dataclass
class InMemoryDevices:
    by_ip: dict[str, Device]
    fail: bool = False

    def get_by_ip(self, ip_address: str) -> Optional[Device]:
        if self.fail:
            raise StoreError("devices table unavailable")
        return self.by_ip.get(ip_address)


class InMemoryPunchLog:
    def __init__(self):
        self.events: list[PunchEvent] = []
        self.fail = False
        self._lock = threading.Lock()

    def append(self, event: PunchEvent) -> int:
        if self.fail:
            raise StoreError("punch_logs insert failed")
        with self._lock:
            self.events.append(event)
            return len(self.events)


class InMemoryAttendance:
    """Attendance store whose create/update are atomic under one lock, like a unique key."""

    def __init__(self):
        self.students: dict[tuple[int, date], StudentAttendanceRecord] = {}
        self.staff: dict[tuple[int, date], StaffAttendanceRecord] = {}
        self.fail = False
        self._lock = threading.Lock()
        self._id = 0

    def _check(self):
        if self.fail:
            raise StoreError("attendance store unavailable")

    def get_student_record(self, person_id: int, attendance_date: date) -> Optional[StudentAttendanceRecord]:
        self._check()
        return self.students.get((person_id, attendance_date))

    def create_student_record_if_absent(self, *, person_id, attendance_date, status, punch_time, device_id=None):
        self._check()
        with self._lock:
            existing = self.students.get((person_id, attendance_date))
            if existing:
                return CreateResult(created=False, record=existing)
            self._id += 1
            rec = StudentAttendanceRecord(
                attendance_id=self._id,
                person_id=person_id,
                attendance_date=attendance_date,
                status=status,
                punch_time=punch_time,
                device_id=device_id,
            )
            self.students[(person_id, attendance_date)] = rec
            return CreateResult(created=True, record=rec)

    def get_staff_record(self, person_id: int, attendance_date: date) -> Optional[StaffAttendanceRecord]:
        self._check()
        return self.staff.get((person_id, attendance_date))

    def create_staff_record_if_absent(
        self, *, person_id, attendance_date, status, punch_in_time, late_minutes, device_id=None
    ):
        self._check()
        with self._lock:
            existing = self.staff.get((person_id, attendance_date))
            if existing:
                return CreateResult(created=False, record=existing)
            self._id += 1
            rec = StaffAttendanceRecord(
                attendance_id=self._id,
                person_id=person_id,
                attendance_date=attendance_date,
                status=status,
                punch_in_time=punch_in_time,
                late_minutes=late_minutes,
                device_id=device_id,
            )
            self.staff[(person_id, attendance_date)] = rec
            return CreateResult(created=True, record=rec)

    def set_punch_out_if_unset(self, *, attendance_id: int, punch_out_time: datetime) -> bool:
        self._check()
        with self._lock:
            for key, rec in self.staff.items():
                if rec.attendance_id == attendance_id:
                    if rec.punch_out_time is not None:
                        return False
                    self.staff[key] = replace(rec, punch_out_time=punch_out_time)
                    return True
        return False


@dataclass
class PunchWorld:
    cards: InMemoryCards
    people: InMemoryPeople
    shifts: InMemoryShifts
    devices: InMemoryDevices
    punch_log: InMemoryPunchLog
    attendance: InMemoryAttendance
    service: PunchService


@pytest.fixture
def tz() -> ZoneInfo:
    return DHAKA


@pytest.fixture
def fixed_now() -> datetime:
    return at(7, 55)


@pytest.fixture
def morning_shift() -> Shift:
    return Shift(
        shift_id=1,
        shift_name="Morning",
        start_time=time(8, 0),
        late_threshold_time=time(8, 30),
        absent_cutoff_time=time(9, 0),
    )


def build_world(morning_shift: Shift, *, attendance: InMemoryAttendance | None = None) -> PunchWorld:
    cards = InMemoryCards(
        [
            CardBinding(card_number=STUDENT_CARD, person_id=1, person_kind=PersonKind.STUDENT),
            CardBinding(card_number=STAFF_CARD, person_id=7, person_kind=PersonKind.STAFF),
            CardBinding(card_number="0000000042", person_id=2, person_kind=PersonKind.STUDENT),
            CardBinding(card_number="0000000099", person_id=404, person_kind=PersonKind.STUDENT),
        ]
    )
    people = InMemoryPeople(
        students={
            1: Person(
                person_id=1,
                kind=PersonKind.STUDENT,
                name="Rahim Uddin",
                name_bn="রহিম উদ্দিন",
                shift_id=1,
                class_name="Class 6",
                section_name="A",
            ),
            2: Person(person_id=2, kind=PersonKind.STUDENT, name="No Shift Student", shift_id=None),
        },
        staff={
            7: Person(
                person_id=7,
                kind=PersonKind.STAFF,
                name="Karim Ahmed",
                designation="Assistant Teacher",
                shift_id=1,
            ),
        },
    )
    shifts = InMemoryShifts({1: morning_shift})
    devices = InMemoryDevices({READER_IP: Device(device_id=3, device_name="Main gate", ip_address=READER_IP)})
    punch_log = InMemoryPunchLog()
    attendance = attendance or InMemoryAttendance()

    service = PunchService(
        devices=DeviceLookup(devices),
        cards=CardResolver(cards),
        people=people,
        shifts=shifts,
        punch_logger=PunchLogger(punch_log),
        attendance=attendance,
        tz=DHAKA,
    )
    return PunchWorld(cards, people, shifts, devices, punch_log, attendance, service)


@pytest.fixture
def world(morning_shift) -> PunchWorld:
    return build_world(morning_shift)
