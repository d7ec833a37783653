from __future__ import annotations

from typing import Protocol

from .model import PunchEvent


class PunchLogRepository(Protocol):
    def append(self, event: PunchEvent) -> int:
        """Insert one row and return its id. Never updates or deletes."""

        raise NotImplementedError
