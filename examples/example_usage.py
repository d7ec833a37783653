"""Example: push one scan through the service layer without Flask.

Expects the demo roster from ``scripts/seed_db.py``.
"""

import importlib
import sys

from dotenv import load_dotenv

from config import get_settings_module

from src.school_attendance.school_attendance.attendance.schemas import PunchRequest
from src.school_attendance.school_attendance.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        school_timezone=settings.SCHOOL_TIMEZONE,
        punch_deadline_seconds=settings.PUNCH_DEADLINE_SECONDS,
    )

    card_number = sys.argv[1] if len(sys.argv) > 1 else "4567890"
    request = PunchRequest.from_payload(
        {"card_number": card_number, "device_ip": "192.168.1.201"},
        tz=container.school_tz,
    )
    print(container.punch_service.process(request).to_response())


if __name__ == "__main__":
    main()
