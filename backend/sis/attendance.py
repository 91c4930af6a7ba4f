"""Daily attendance marking and the per-student "latest attendance" views."""
import logging
from datetime import datetime, time

from sqlalchemy import and_, func
from sqlalchemy.exc import IntegrityError

from sis.extensions import db
from sis.errors import InvalidInput
from sis.models import Student, AttendanceRecord, AttendanceStatus
from utils.access_control import get_owned_student

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


def day_window(now):
    """Return the local calendar day containing ``now`` as ``(start, end)``."""
    return datetime.combine(now.date(), time.min), datetime.combine(now.date(), END_OF_DAY)


def validate_status(status):
    if status not in AttendanceStatus.values():
        raise InvalidInput(
            "Invalid status. Expected one of: " + ", ".join(AttendanceStatus.values()),
            field="status",
        )
    return status


def _find_for_day(student_id, now):
    start, end = day_window(now)
    return AttendanceRecord.query.filter(
        AttendanceRecord.student_id == student_id,
        AttendanceRecord.date >= start,
        AttendanceRecord.date <= end,
    ).first()


def _apply_mark(record, status, now):
    record.status = status
    record.date = now


def mark_attendance(owner_id, student_id, status, now=None):
    """
    Record ``status`` as the student's attendance for today.

    Returns ``(record, created)``. A second mark on the same day updates the
    existing record in place instead of inserting another one. The
    ``(student_id, day)`` unique constraint backs this up when two requests
    race: the loser's insert fails and it updates the winner's record instead.
    """
    status = validate_status(status)
    student = get_owned_student(owner_id, student_id)
    student_id = student.id
    now = now or datetime.now()

    record = _find_for_day(student_id, now)
    if record is not None:
        _apply_mark(record, status, now)
        db.session.commit()
        logger.info("Updated attendance for student %s to %s", student_id, status)
        return record, False

    record = AttendanceRecord(student_id=student_id, status=status, date=now, day=now.date())
    db.session.add(record)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning("Concurrent attendance mark for student %s; updating existing record", student_id)
        record = _find_for_day(student_id, now)
        if record is None:
            raise
        _apply_mark(record, status, now)
        db.session.commit()
        return record, False

    logger.info("Created attendance for student %s as %s", student_id, status)
    return record, True


def roster_with_latest_attendance(owner_id):
    """
    All students of ``owner_id`` (newest first), each with the status and date
    of its most recent attendance record across all time, or None/None.

    One grouped query: max(date) per student, joined back to the record.
    """
    latest = (
        db.session.query(
            AttendanceRecord.student_id.label("student_id"),
            func.max(AttendanceRecord.date).label("latest_date"),
        )
        .join(Student, Student.id == AttendanceRecord.student_id)
        .filter(Student.owner_id == owner_id)
        .group_by(AttendanceRecord.student_id)
        .subquery()
    )

    rows = (
        db.session.query(Student, AttendanceRecord.status, AttendanceRecord.date)
        .outerjoin(latest, latest.c.student_id == Student.id)
        .outerjoin(
            AttendanceRecord,
            and_(
                AttendanceRecord.student_id == Student.id,
                AttendanceRecord.date == latest.c.latest_date,
            ),
        )
        .filter(Student.owner_id == owner_id)
        .order_by(Student.created_at.desc(), Student.id.desc())
        .all()
    )

    return [
        student.to_dict(attendance=status, attendance_updated_at=date, include_attendance=True)
        for student, status, date in rows
    ]


def attendance_history(owner_id, student_id, days):
    """Most recent ``days`` records for an owned student, newest first."""
    try:
        limit = int(days)
    except (TypeError, ValueError):
        raise InvalidInput("days must be a positive integer", field="days")
    if limit <= 0:
        raise InvalidInput("days must be a positive integer", field="days")

    student = get_owned_student(owner_id, student_id)
    records = (
        AttendanceRecord.query.filter_by(student_id=student.id)
        .order_by(AttendanceRecord.date.desc())
        .limit(limit)
        .all()
    )
    return student, records
