from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import DecisionOutcome
from ...shifts.model import Shift
from ..model import AttendanceRecord
from .base import AttendanceStrategy, PunchDecision
from .thresholds import classify_punch


class StudentStrategy(AttendanceStrategy):
    """First punch decides the day (present, late or absent); later punches are inert."""

    def decide_first_punch(self, *, punch_at: datetime, shift: Optional[Shift]) -> PunchDecision:
        status, late_minutes = classify_punch(punch_at, shift, allow_absent=True)
        return PunchDecision(outcome=DecisionOutcome.CREATE, status=status, late_minutes=late_minutes)

    def decide_next_punch(self, *, existing: AttendanceRecord) -> PunchDecision:
        return PunchDecision(outcome=DecisionOutcome.NONE, status=existing.status)
