from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, DecisionOutcome, PunchAction
from ...shifts.model import Shift
from ..model import AttendanceRecord


@dataclass(frozen=True)
class PunchDecision:
    outcome: DecisionOutcome
    status: AttendanceStatus
    late_minutes: int = 0
    action: Optional[PunchAction] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how one person kind reacts to a punch."""

    @abstractmethod
    def decide_first_punch(self, *, punch_at: datetime, shift: Optional[Shift]) -> PunchDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_next_punch(self, *, existing: AttendanceRecord) -> PunchDecision:
        raise NotImplementedError
