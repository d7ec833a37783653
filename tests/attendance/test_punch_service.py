from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.attendance.schemas import PunchRequest
from src.school_attendance.school_attendance.common.deadline import Deadline
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, PersonKind, PunchAction
from src.school_attendance.school_attendance.core.exceptions import (
    CardNotRegistered,
    DeadlineExceeded,
    PersonNotFound,
    StoreError,
)

from conftest import PUNCH_DAY, READER_IP, STAFF_CARD, STUDENT_CARD, at


def punch(world, card: str, when, *, device_ip: str | None = READER_IP):
    return world.service.process(PunchRequest(card_number=card, device_ip=device_ip, punch_time=when))


def test_unknown_card_leaves_no_trace(world):
    with pytest.raises(CardNotRegistered) as exc_info:
        punch(world, "12345", at(7, 55))

    assert exc_info.value.card_number == "12345"
    assert world.punch_log.events == []
    assert world.attendance.students == {}
    assert world.attendance.staff == {}


def test_card_bound_to_missing_person_is_not_found_and_not_logged(world):
    with pytest.raises(PersonNotFound) as exc_info:
        punch(world, "0000000099", at(7, 55))

    assert str(exc_info.value) == "Student not found"
    assert world.punch_log.events == []


def test_student_first_punch_decides_the_day(world):
    result = punch(world, STUDENT_CARD, at(8, 15))

    assert result.is_first_punch is True
    assert result.status == AttendanceStatus.LATE
    assert result.late_minutes == 15
    assert result.message == "First punch - attendance recorded"

    record = world.attendance.students[(1, PUNCH_DAY)]
    assert record.status == AttendanceStatus.LATE
    assert record.device_id == 3

    [event] = world.punch_log.events
    assert event.person_id == 1
    assert event.person_kind == PersonKind.STUDENT
    assert event.punch_date == PUNCH_DAY
    assert event.card_number == STUDENT_CARD
    assert event.device_id == 3


def test_student_second_punch_is_logged_only(world):
    punch(world, STUDENT_CARD, at(7, 55))
    second = punch(world, STUDENT_CARD, at(9, 30))

    assert second.is_first_punch is False
    assert second.status == AttendanceStatus.PRESENT
    assert second.late_minutes is None
    assert second.message == "Punch recorded (attendance already marked)"
    assert world.attendance.students[(1, PUNCH_DAY)].status == AttendanceStatus.PRESENT
    assert len(world.punch_log.events) == 2


def test_student_without_shift_is_present_at_any_time(world):
    result = punch(world, "42", at(11, 30))

    assert result.status == AttendanceStatus.PRESENT
    assert result.person.person_id == 2


def test_staff_punch_in_out_then_additional(world):
    first = punch(world, STAFF_CARD, at(8, 45))
    assert first.is_first_punch is True
    assert first.action == PunchAction.PUNCH_IN
    assert first.status == AttendanceStatus.LATE
    assert first.late_minutes == 45

    second = punch(world, STAFF_CARD, at(15, 30))
    assert second.is_first_punch is False
    assert second.action == PunchAction.PUNCH_OUT
    assert second.message == "Punch out recorded"

    record = world.attendance.staff[(7, PUNCH_DAY)]
    assert record.punch_out_time == at(15, 30)
    assert record.status == AttendanceStatus.LATE
    assert record.late_minutes == 45

    third = punch(world, STAFF_CARD, at(16, 0))
    assert third.action == PunchAction.ADDITIONAL_PUNCH
    assert third.message == "Additional punch recorded"
    assert world.attendance.staff[(7, PUNCH_DAY)] == record
    assert len(world.punch_log.events) == 3


def test_replayed_request_makes_one_record_and_n_log_rows(world):
    for _ in range(5):
        punch(world, STUDENT_CARD, at(8, 5))

    assert len(world.attendance.students) == 1
    assert len(world.punch_log.events) == 5


def test_punch_on_another_day_starts_a_new_record(world):
    punch(world, STUDENT_CARD, at(7, 55))
    next_day = punch(world, STUDENT_CARD, at(9, 20, day=PUNCH_DAY.replace(day=3)))

    assert next_day.is_first_punch is True
    assert next_day.status == AttendanceStatus.ABSENT
    assert next_day.late_minutes == 0
    assert len(world.attendance.students) == 2


def test_punch_log_failure_does_not_block_classification(world, caplog):
    world.punch_log.fail = True

    result = punch(world, STUDENT_CARD, at(7, 58))

    assert result.is_first_punch is True
    assert (1, PUNCH_DAY) in world.attendance.students
    assert "Could not log punch" in caplog.text


def test_device_lookup_is_best_effort(world):
    world.devices.fail = True

    result = punch(world, STUDENT_CARD, at(7, 58))

    assert result.is_first_punch is True
    assert world.attendance.students[(1, PUNCH_DAY)].device_id is None


def test_unregistered_device_address_is_not_fatal(world):
    punch(world, STUDENT_CARD, at(7, 58), device_ip="10.0.0.9")

    assert world.punch_log.events[0].device_id is None


def test_store_failure_surfaces_after_punch_was_logged(world):
    world.attendance.fail = True

    with pytest.raises(StoreError):
        punch(world, STUDENT_CARD, at(7, 58))

    assert len(world.punch_log.events) == 1


def test_expired_deadline_aborts_before_any_write(world):
    ticks = iter([0.0, 10.0])
    deadline = Deadline(1.0, clock=lambda: next(ticks, 10.0))

    with pytest.raises(DeadlineExceeded):
        world.service.process(PunchRequest(card_number=STUDENT_CARD, punch_time=at(7, 55)), deadline=deadline)

    assert world.punch_log.events == []
    assert world.attendance.students == {}


def test_deadline_running_out_during_card_resolution_still_logs_the_punch(world):
    ticks = iter([0.0, 0.5, 10.0])
    deadline = Deadline(1.0, clock=lambda: next(ticks, 10.0))

    with pytest.raises(DeadlineExceeded, match="punch logging"):
        world.service.process(PunchRequest(card_number=STUDENT_CARD, punch_time=at(7, 55)), deadline=deadline)

    assert len(world.punch_log.events) == 1
    assert world.punch_log.events[0].person_id == 1
    assert world.attendance.students == {}


def test_default_punch_time_is_now_in_school_timezone(world, monkeypatch, tz):
    from src.school_attendance.school_attendance.attendance import service as service_module

    monkeypatch.setattr(service_module, "now_local", lambda _tz: at(7, 40))

    result = world.service.process(PunchRequest(card_number=STUDENT_CARD))

    assert result.punch_at == at(7, 40)
    assert result.punch_at.tzinfo == tz
    assert result.status == AttendanceStatus.PRESENT
