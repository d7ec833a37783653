from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import DecisionOutcome, PunchAction
from ...shifts.model import Shift
from ..model import StaffAttendanceRecord
from .base import AttendanceStrategy, PunchDecision
from .thresholds import classify_punch


class StaffStrategy(AttendanceStrategy):
    """Punch in, then punch out once; everything after is an additional punch."""

    def decide_first_punch(self, *, punch_at: datetime, shift: Optional[Shift]) -> PunchDecision:
        # Staff are never marked absent by time; a missed day has no record.
        status, late_minutes = classify_punch(punch_at, shift, allow_absent=False)
        return PunchDecision(
            outcome=DecisionOutcome.CREATE,
            status=status,
            late_minutes=late_minutes,
            action=PunchAction.PUNCH_IN,
        )

    def decide_next_punch(self, *, existing: StaffAttendanceRecord) -> PunchDecision:
        if existing.punch_out_time is None:
            return PunchDecision(
                outcome=DecisionOutcome.PUNCH_OUT,
                status=existing.status,
                late_minutes=existing.late_minutes,
                action=PunchAction.PUNCH_OUT,
            )
        return PunchDecision(
            outcome=DecisionOutcome.NONE,
            status=existing.status,
            late_minutes=existing.late_minutes,
            action=PunchAction.ADDITIONAL_PUNCH,
        )
