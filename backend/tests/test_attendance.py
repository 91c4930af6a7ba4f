from datetime import datetime, timedelta

import pytest

from sis import attendance
from sis.attendance import (
    attendance_history,
    day_window,
    mark_attendance,
    roster_with_latest_attendance,
)
from sis.errors import InvalidInput, NotFound
from sis.extensions import db
from sis.models import AttendanceRecord

DAY1 = datetime(2026, 3, 2)


def records_for(student):
    return AttendanceRecord.query.filter_by(student_id=student.id).all()


def test_day_window_covers_whole_local_day():
    start, end = day_window(DAY1.replace(hour=13, minute=45))
    assert start == datetime(2026, 3, 2, 0, 0, 0)
    assert end == datetime(2026, 3, 2, 23, 59, 59, 999000)


@pytest.mark.parametrize("status", ["present", "absent", "late"])
def test_first_mark_creates_one_record_for_today(teacher, student, status):
    now = DAY1.replace(hour=10)
    record, created = mark_attendance(teacher.id, student.id, status, now=now)

    assert created is True
    assert record.status == status
    assert record.date == now
    assert record.day == now.date()
    assert len(records_for(student)) == 1


def test_second_mark_same_day_updates_existing_record(teacher, student):
    first, created_first = mark_attendance(teacher.id, student.id, "present", now=DAY1.replace(hour=9))
    first_id = first.id
    second, created_second = mark_attendance(teacher.id, student.id, "late", now=DAY1.replace(hour=15))

    assert created_first is True
    assert created_second is False
    assert second.id == first_id
    records = records_for(student)
    assert len(records) == 1
    assert records[0].status == "late"
    assert records[0].date == DAY1.replace(hour=15)


def test_marks_on_different_days_keep_history(teacher, student):
    mark_attendance(teacher.id, student.id, "present", now=DAY1.replace(hour=9))
    mark_attendance(teacher.id, student.id, "absent", now=(DAY1 + timedelta(days=1)).replace(hour=9))

    assert len(records_for(student)) == 2


def test_mark_just_before_and_after_midnight_are_separate_days(teacher, student):
    mark_attendance(teacher.id, student.id, "present", now=DAY1.replace(hour=23, minute=59, second=59))
    _, created = mark_attendance(teacher.id, student.id, "late", now=DAY1 + timedelta(days=1))

    assert created is True
    assert len(records_for(student)) == 2


@pytest.mark.parametrize("status", ["PRESENT", "excused", "", None])
def test_invalid_status_is_rejected(teacher, student, status):
    with pytest.raises(InvalidInput) as exc:
        mark_attendance(teacher.id, student.id, status, now=DAY1)
    assert exc.value.field == "status"
    assert records_for(student) == []


def test_student_of_another_teacher_is_not_found(teacher, other_teacher, make_student):
    theirs = make_student("bongani", owner=other_teacher)
    with pytest.raises(NotFound) as exc:
        mark_attendance(teacher.id, theirs.id, "present", now=DAY1)
    assert exc.value.message == "Student not found"


def test_missing_student_is_not_found(teacher):
    with pytest.raises(NotFound):
        mark_attendance(teacher.id, 9999, "present", now=DAY1)


def test_insert_collision_falls_back_to_update(teacher, student, monkeypatch):
    # Another request already stored today's record, but this one read before it landed.
    now = DAY1.replace(hour=11)
    db.session.add(AttendanceRecord(student_id=student.id, status="absent", date=now - timedelta(hours=2), day=now.date()))
    db.session.commit()

    real_find = attendance._find_for_day
    calls = []

    def stale_find(student_id, when):
        calls.append(when)
        if len(calls) == 1:
            return None
        return real_find(student_id, when)

    monkeypatch.setattr(attendance, "_find_for_day", stale_find)
    record, created = mark_attendance(teacher.id, student.id, "present", now=now)

    assert created is False
    assert record.status == "present"
    assert record.date == now
    assert AttendanceRecord.query.filter_by(student_id=student.id).count() == 1


def test_roster_reports_latest_record_by_date(teacher, student, make_student):
    bob = make_student("bob")
    make_student("carol")
    for offset, status in [(0, "present"), (1, "absent"), (2, "late"), (3, "absent")]:
        mark_attendance(teacher.id, student.id, status, now=(DAY1 + timedelta(days=offset)).replace(hour=8))
    mark_attendance(teacher.id, bob.id, "late", now=DAY1.replace(hour=8))

    roster = {s["username"]: s for s in roster_with_latest_attendance(teacher.id)}

    assert roster["alice"]["attendance"] == "absent"
    assert roster["alice"]["attendanceUpdatedAt"] == (DAY1 + timedelta(days=3)).replace(hour=8).isoformat()
    assert roster["bob"]["attendance"] == "late"
    assert roster["carol"]["attendance"] is None
    assert roster["carol"]["attendanceUpdatedAt"] is None


def test_roster_is_owner_scoped_and_newest_first(teacher, other_teacher, make_student):
    make_student("first")
    make_student("second")
    make_student("intruder", owner=other_teacher)

    usernames = [s["username"] for s in roster_with_latest_attendance(teacher.id)]
    assert usernames == ["second", "first"]


def test_roster_empty_for_new_teacher(teacher):
    assert roster_with_latest_attendance(teacher.id) == []


def test_history_is_newest_first_and_limited(teacher, student):
    for offset in range(5):
        mark_attendance(teacher.id, student.id, "present", now=(DAY1 + timedelta(days=offset)).replace(hour=9))

    found, records = attendance_history(teacher.id, student.id, 3)

    assert found.id == student.id
    assert [r.day for r in records] == [(DAY1 + timedelta(days=d)).date() for d in (4, 3, 2)]


@pytest.mark.parametrize("days", [0, -1, "abc", None])
def test_history_rejects_bad_days(teacher, student, days):
    with pytest.raises(InvalidInput):
        attendance_history(teacher.id, student.id, days)
