from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PersonKind
from ..shifts.model import Shift
from .model import AttendanceRecord
from .strategies.base import AttendanceStrategy, PunchDecision
from .strategies.staff_strategy import StaffStrategy
from .strategies.student_strategy import StudentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy for a person kind."""

    def for_kind(self, kind: PersonKind) -> AttendanceStrategy:
        if kind is PersonKind.STUDENT:
            return StudentStrategy()
        if kind is PersonKind.STAFF:
            return StaffStrategy()
        raise ValueError(f"Unsupported person kind: {kind!r}")


class AttendanceClassifier:
    """Pure decision logic: (snapshot, punch, shift, kind) -> decision. No I/O."""

    def __init__(self, factory: AttendanceStrategyFactory | None = None):
        self._factory = factory or AttendanceStrategyFactory()

    def classify(
        self,
        *,
        kind: PersonKind,
        existing: Optional[AttendanceRecord],
        punch_at: datetime,
        shift: Optional[Shift],
    ) -> PunchDecision:
        strategy = self._factory.for_kind(kind)
        if existing is None:
            return strategy.decide_first_punch(punch_at=punch_at, shift=shift)
        return strategy.decide_next_punch(existing=existing)
