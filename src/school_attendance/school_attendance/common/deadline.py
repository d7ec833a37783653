from __future__ import annotations

import time

from ..core.exceptions import DeadlineExceeded


class Deadline:
    """Time budget for one request, checked between processing steps."""

    def __init__(self, seconds: float, *, clock=time.monotonic):
        self._clock = clock
        self._expires_at = clock() + float(seconds)

    def check(self, stage: str) -> None:
        if self._clock() > self._expires_at:
            raise DeadlineExceeded(f"Punch processing timed out after {stage}")
