from __future__ import annotations

from enum import Enum


class PersonKind(str, Enum):
    """Kind of person a card can be bound to."""

    STUDENT = "student"
    STAFF = "staff"

    @property
    def wire_name(self) -> str:
        # Reader displays and stored punch logs call staff members "teacher".
        return "teacher" if self is PersonKind.STAFF else self.value


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class PunchAction(str, Enum):
    """What a staff punch did to the day's record."""

    PUNCH_IN = "punch_in"
    PUNCH_OUT = "punch_out"
    ADDITIONAL_PUNCH = "additional_punch"


class DecisionOutcome(str, Enum):
    """Store mutation requested by a classification."""

    CREATE = "create"
    PUNCH_OUT = "punch_out"
    NONE = "none"
