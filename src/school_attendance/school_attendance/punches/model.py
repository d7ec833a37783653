from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PersonKind


@dataclass(frozen=True)
class PunchEvent:
    """One card scan, as written to the append-only punch log."""

    person_id: int
    person_kind: PersonKind
    punch_date: date
    punch_time: datetime
    card_number: str
    device_id: Optional[int] = None
