from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import minutes_of_day
from ...core.enums import AttendanceStatus
from ...shifts.model import Shift


def classify_punch(punch_at: datetime, shift: Optional[Shift], *, allow_absent: bool) -> tuple[AttendanceStatus, int]:
    """Map a punch to ``(status, late_minutes)`` using the shift thresholds.

    Outcome table, compared in whole minutes of the day:

    ========================================  =======  =================
    punch                                     status   with allow_absent
    ========================================  =======  =================
    ``<= start``                              present  present
    ``start < t <= absent_cutoff``            late     late
    ``> absent_cutoff``                       late     absent
    no shift                                  present  present
    ========================================  =======  =================

    ``start`` is an inclusive upper bound for present; the absent
    cutoff itself is still late. A missing cutoff never yields absent.
    Absent punches carry no late minutes.
    """

    if shift is None:
        return AttendanceStatus.PRESENT, 0

    punch_minutes = minutes_of_day(punch_at)
    start_minutes = minutes_of_day(shift.start_time)
    if punch_minutes <= start_minutes:
        return AttendanceStatus.PRESENT, 0

    late_minutes = punch_minutes - start_minutes
    cutoff = shift.absent_cutoff_time
    if allow_absent and cutoff is not None and punch_minutes > minutes_of_day(cutoff):
        return AttendanceStatus.ABSENT, 0
    return AttendanceStatus.LATE, late_minutes
