from __future__ import annotations

from datetime import datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {name!r}") from exc


def now_local(tz: ZoneInfo) -> datetime:
    """Current time in the school's time zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def parse_punch_time(value: str, tz: ZoneInfo) -> datetime:
    """Parse an ISO-8601 punch time into an aware, school-local datetime.

    Naive values are taken as already being school-local time; values with an
    offset (including a trailing ``Z``) are converted.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError("punch_time must be an ISO-8601 timestamp") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def minutes_of_day(value: datetime | time) -> int:
    """Minutes since midnight; seconds are ignored."""
    return value.hour * 60 + value.minute


def format_clock(value: datetime) -> str:
    return value.strftime("%H:%M:%S")
