from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a shift and the thresholds used to classify punches."""

    shift_id: int
    shift_name: str
    start_time: time
    # Punches on either side of the late threshold are late; only start and
    # cutoff change the outcome.
    late_threshold_time: Optional[time] = None
    absent_cutoff_time: Optional[time] = None
