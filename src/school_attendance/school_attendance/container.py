from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo

from .attendance.factory import AttendanceClassifier, AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import PunchService
from .cards.mysql_card_repository import MySQLCardRepository
from .cards.resolver import CardResolver
from .common.datetime_utils import load_timezone
from .core.constants import DEFAULT_PUNCH_DEADLINE_SECONDS, DEFAULT_SCHOOL_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .devices.mysql_device_repository import MySQLDeviceRepository
from .devices.service import DeviceLookup
from .people.mysql_person_repository import MySQLPersonRepository
from .punches.mysql_punch_log_repository import MySQLPunchLogRepository
from .punches.service import PunchLogger
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Container:
    school_tz: ZoneInfo
    device_secret: Optional[str]

    punch_service: PunchService


def build_container(
    *,
    db_config: dict,
    school_timezone: str = DEFAULT_SCHOOL_TIMEZONE,
    device_secret: Optional[str] = None,
    punch_deadline_seconds: float = DEFAULT_PUNCH_DEADLINE_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    tz = load_timezone(school_timezone)

    punch_service = PunchService(
        devices=DeviceLookup(MySQLDeviceRepository(conn)),
        cards=CardResolver(MySQLCardRepository(conn)),
        people=MySQLPersonRepository(conn),
        shifts=MySQLShiftRepository(conn),
        punch_logger=PunchLogger(MySQLPunchLogRepository(conn)),
        attendance=MySQLAttendanceRepository(conn),
        classifier=AttendanceClassifier(AttendanceStrategyFactory()),
        tz=tz,
        deadline_seconds=punch_deadline_seconds,
    )

    return Container(
        school_tz=tz,
        device_secret=device_secret or None,
        punch_service=punch_service,
    )
