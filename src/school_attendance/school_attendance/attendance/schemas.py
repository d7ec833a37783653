from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import format_clock, parse_punch_time
from ..common.validators import optional_string, reject_unknown_fields, require_non_empty
from ..core.enums import AttendanceStatus, PersonKind, PunchAction
from ..core.exceptions import ValidationError
from ..people.model import Person

PUNCH_REQUEST_FIELDS = ("card_number", "device_ip", "punch_time")


@dataclass(frozen=True)
class PunchRequest:
    """Validated body of a punch ingestion request."""

    card_number: str
    device_ip: Optional[str] = None
    punch_time: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: Any, *, tz: ZoneInfo) -> "PunchRequest":
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        reject_unknown_fields(payload, PUNCH_REQUEST_FIELDS)

        raw_card = payload.get("card_number")
        # Some reader firmware sends the card id as a JSON number.
        if isinstance(raw_card, int) and not isinstance(raw_card, bool):
            raw_card = str(raw_card)
        if raw_card is None or raw_card == "":
            raise ValidationError("Card number is required")
        if not isinstance(raw_card, str):
            raise ValidationError("card_number must be a string")
        card_number = require_non_empty(raw_card, "Card number")

        raw_time = optional_string(payload, "punch_time")
        return cls(
            card_number=card_number,
            device_ip=optional_string(payload, "device_ip"),
            punch_time=parse_punch_time(raw_time, tz) if raw_time else None,
        )


@dataclass(frozen=True)
class PunchResult:
    """What happened to one punch, ready to be rendered for the reader."""

    person: Person
    status: AttendanceStatus
    punch_at: datetime
    is_first_punch: bool
    message: str
    attendance_id: int
    action: Optional[PunchAction] = None
    late_minutes: Optional[int] = None

    def to_response(self) -> dict:
        person = self.person
        body: dict[str, Any] = {
            "success": True,
            "type": person.kind.wire_name,
            "name": person.name,
            "name_bn": person.name_bn,
            "photo_url": person.photo_url,
        }
        if person.kind is PersonKind.STUDENT:
            body["class_name"] = person.class_name
            body["section_name"] = person.section_name
        else:
            body["designation"] = person.designation
            body["action"] = self.action.value if self.action else None

        body["status"] = self.status.value
        body["punch_time"] = format_clock(self.punch_at)
        if self.late_minutes is not None:
            body["late_minutes"] = self.late_minutes
        body["is_first_punch"] = self.is_first_punch
        body["message"] = self.message
        return body
