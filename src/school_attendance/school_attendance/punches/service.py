from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import LoggingFailure
from .model import PunchEvent
from .repository import PunchLogRepository

logger = logging.getLogger(__name__)


class PunchLogger:
    """Append punches to the forensic log without ever failing the request."""

    def __init__(self, punch_logs: PunchLogRepository):
        self._punch_logs = punch_logs

    def record(self, event: PunchEvent) -> Optional[int]:
        """Return the new punch id, or ``None`` if the write failed."""

        try:
            return self._punch_logs.append(event)
        except Exception as exc:
            failure = LoggingFailure(
                f"Could not log punch of {event.person_kind.value} {event.person_id} "
                f"(card {event.card_number}) at {event.punch_time.isoformat()}"
            )
            logger.error("%s", failure, exc_info=exc)
            return None
