"""
Attendance reports built from a roster snapshot.

The roster is the list returned by ``GET /api/students``: one dict per
student with ``attendance`` and ``attendanceUpdatedAt`` attached. Nothing
here touches the database, so the API client and the ``/api/reports``
endpoint produce the same report from the same roster.
"""
from datetime import datetime

from sis.errors import InvalidInput, PreconditionFailed
from sis.models.base import AttendanceStatus

PERIODS = ("daily", "weekly", "monthly")


def _timestamp(value):
    return value.isoformat() if isinstance(value, datetime) else value


def attendance_stats(students):
    """Dashboard tiles: counts per latest status plus the unmarked students."""
    stats = {status: 0 for status in AttendanceStatus.values()}
    not_marked = 0
    for student in students:
        status = student.get("attendance")
        if status in stats:
            stats[status] += 1
        elif not status:
            not_marked += 1
    stats["notMarked"] = not_marked
    return stats


def generate_report(students, period="daily", now=None):
    """
    Summarise the latest known attendance of every marked student.

    ``period`` only labels the report; every student's most recent status is
    reported whatever period is chosen.

    Raises PreconditionFailed when the roster is empty or nobody has been
    marked yet.
    """
    period = (period or "daily").strip().lower()
    if period not in PERIODS:
        raise InvalidInput("period must be one of: " + ", ".join(PERIODS), field="period")

    if not students:
        raise PreconditionFailed("No students found. Add students first!")

    marked = [s for s in students if s.get("attendance")]
    if not marked:
        raise PreconditionFailed("No attendance marked yet. Mark attendance for students first!")

    now = now or datetime.now()
    stats = {
        "total": len(students),
        "present": sum(1 for s in marked if s["attendance"] == AttendanceStatus.present.value),
        "absent": sum(1 for s in marked if s["attendance"] == AttendanceStatus.absent.value),
        "late": sum(1 for s in marked if s["attendance"] == AttendanceStatus.late.value),
    }

    rows = [
        {
            "id": s.get("id"),
            "username": s.get("username"),
            "email": s.get("email"),
            "attendance": s["attendance"],
            "markedOn": _timestamp(s.get("attendanceUpdatedAt") or now),
        }
        for s in marked
    ]

    return {
        "stats": stats,
        "students": rows,
        "period": period.capitalize(),
        "generatedAt": now.isoformat(sep=" ", timespec="seconds"),
    }
