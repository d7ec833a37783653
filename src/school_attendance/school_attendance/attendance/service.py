from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..cards.model import ResolvedCard
from ..cards.resolver import CardResolver
from ..common.datetime_utils import now_local
from ..common.deadline import Deadline
from ..core.constants import (
    DEFAULT_PUNCH_DEADLINE_SECONDS,
    MESSAGE_ADDITIONAL_PUNCH,
    MESSAGE_ALREADY_MARKED,
    MESSAGE_FIRST_PUNCH,
    MESSAGE_PUNCH_OUT,
)
from ..core.enums import DecisionOutcome, PersonKind, PunchAction
from ..core.exceptions import PersonNotFound
from ..devices.service import DeviceLookup
from ..people.model import Person
from ..people.repository import PersonRepository
from ..punches.model import PunchEvent
from ..punches.service import PunchLogger
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .factory import AttendanceClassifier
from .model import AttendanceRecord, CreateResult
from .repository import AttendanceRepository
from .schemas import PunchRequest, PunchResult
from .strategies.base import PunchDecision

logger = logging.getLogger(__name__)


class PunchService:
    """Turns one card scan into a punch log row and, when decisive, an attendance change.

    Order of work: device lookup, card resolution, person lookup, punch log
    (best effort), attendance snapshot, classification, atomic store write.
    Validation and not-found failures happen before any write.
    The deadline is not checked between person lookup and the log write, so a
    matched card always leaves a log row.
    """

    def __init__(
        self,
        *,
        devices: DeviceLookup,
        cards: CardResolver,
        people: PersonRepository,
        shifts: ShiftRepository,
        punch_logger: PunchLogger,
        attendance: AttendanceRepository,
        classifier: AttendanceClassifier | None = None,
        tz: ZoneInfo,
        deadline_seconds: float = DEFAULT_PUNCH_DEADLINE_SECONDS,
    ):
        self._devices = devices
        self._cards = cards
        self._people = people
        self._shifts = shifts
        self._punch_logger = punch_logger
        self._attendance = attendance
        self._classifier = classifier or AttendanceClassifier()
        self._tz = tz
        self._deadline_seconds = float(deadline_seconds)

    def process(self, request: PunchRequest, *, deadline: Deadline | None = None) -> PunchResult:
        deadline = deadline or Deadline(self._deadline_seconds)
        punch_at = request.punch_time or now_local(self._tz)
        punch_date = punch_at.date()

        device_id = self._devices.resolve(request.device_ip)
        deadline.check("device lookup")

        card = self._cards.resolve(request.card_number)
        person = self._load_person(card)

        self._punch_logger.record(
            PunchEvent(
                person_id=person.person_id,
                person_kind=person.kind,
                punch_date=punch_date,
                punch_time=punch_at,
                card_number=card.card_number,
                device_id=device_id,
            )
        )
        deadline.check("punch logging")

        shift = self._load_shift(person)
        existing = self._snapshot(person, punch_date)
        deadline.check("attendance lookup")

        decision = self._classifier.classify(kind=person.kind, existing=existing, punch_at=punch_at, shift=shift)

        if decision.outcome is DecisionOutcome.CREATE:
            created = self._create(person, punch_date, punch_at, decision, device_id)
            if created.created:
                logger.info(
                    "First punch: %s %s on %s -> %s",
                    person.kind.value, person.person_id, punch_date, decision.status.value,
                )
                return self._result(person, created.record, punch_at, decision, is_first=True)
            # Another punch committed first; re-decide against the winner.
            existing = created.record
            decision = self._classifier.classify(kind=person.kind, existing=existing, punch_at=punch_at, shift=shift)

        if decision.outcome is DecisionOutcome.PUNCH_OUT:
            if self._attendance.set_punch_out_if_unset(attendance_id=existing.attendance_id, punch_out_time=punch_at):
                logger.info("Punch out: %s %s on %s", person.kind.value, person.person_id, punch_date)
                return self._result(person, existing, punch_at, decision, is_first=False)
            decision = PunchDecision(
                outcome=DecisionOutcome.NONE,
                status=existing.status,
                late_minutes=decision.late_minutes,
                action=PunchAction.ADDITIONAL_PUNCH,
            )

        logger.debug("Punch logged only: %s %s on %s", person.kind.value, person.person_id, punch_date)
        return self._result(person, existing, punch_at, decision, is_first=False)

    def _load_person(self, card: ResolvedCard) -> Person:
        if card.person_kind is PersonKind.STUDENT:
            person = self._people.get_student(card.person_id)
            label = "Student"
        else:
            person = self._people.get_staff(card.person_id)
            label = "Teacher"
        if person is None:
            logger.warning("Card %s is bound to missing %s %s", card.card_number, label.lower(), card.person_id)
            raise PersonNotFound(label)
        return person

    def _load_shift(self, person: Person) -> Optional[Shift]:
        if not person.shift_id:
            return None
        return self._shifts.get_by_id(person.shift_id)

    def _snapshot(self, person: Person, punch_date: date) -> Optional[AttendanceRecord]:
        if person.kind is PersonKind.STUDENT:
            return self._attendance.get_student_record(person.person_id, punch_date)
        return self._attendance.get_staff_record(person.person_id, punch_date)

    def _create(
        self,
        person: Person,
        punch_date: date,
        punch_at: datetime,
        decision: PunchDecision,
        device_id: Optional[int],
    ) -> CreateResult:
        if person.kind is PersonKind.STUDENT:
            return self._attendance.create_student_record_if_absent(
                person_id=person.person_id,
                attendance_date=punch_date,
                status=decision.status,
                punch_time=punch_at,
                device_id=device_id,
            )
        return self._attendance.create_staff_record_if_absent(
            person_id=person.person_id,
            attendance_date=punch_date,
            status=decision.status,
            punch_in_time=punch_at,
            late_minutes=decision.late_minutes,
            device_id=device_id,
        )

    def _result(
        self,
        person: Person,
        record: AttendanceRecord,
        punch_at: datetime,
        decision: PunchDecision,
        *,
        is_first: bool,
    ) -> PunchResult:
        if is_first:
            message = MESSAGE_FIRST_PUNCH
        elif decision.action is PunchAction.PUNCH_OUT:
            message = MESSAGE_PUNCH_OUT
        elif decision.action is PunchAction.ADDITIONAL_PUNCH:
            message = MESSAGE_ADDITIONAL_PUNCH
        else:
            message = MESSAGE_ALREADY_MARKED

        return PunchResult(
            person=person,
            status=record.status,
            punch_at=punch_at,
            is_first_punch=is_first,
            message=message,
            attendance_id=record.attendance_id,
            action=decision.action,
            late_minutes=decision.late_minutes if is_first else None,
        )
