from datetime import datetime, timedelta

from sis.extensions import db
from sis.models import AttendanceRecord, AuditLog, PasswordReset, Student, TokenBlocklist, User
from sis.seed import seed_data


def test_seed_is_idempotent(app):
    teacher, students, created = seed_data()
    assert teacher.email == "teacher@sis.local"
    assert len(students) == 3
    assert created == 9

    _, _, created = seed_data()
    assert created == 0
    assert AttendanceRecord.query.count() == 9


def test_seed_reset_clears_rows_owned_by_teachers(app):
    teacher, _, _ = seed_data()
    db.session.add(TokenBlocklist(jti="revoked-jti", user_id=teacher.id,
                                  expires_at=datetime.utcnow() + timedelta(days=1)))
    db.session.add(PasswordReset(user_id=teacher.id, token="123456",
                                 expires_at=datetime.utcnow() + timedelta(minutes=10)))
    db.session.add(AuditLog(user_id=teacher.id, action="RATE_LIMIT", ip_address="127.0.0.1"))
    db.session.commit()

    teacher, students, created = seed_data(reset=True)

    assert TokenBlocklist.query.count() == 0
    assert PasswordReset.query.count() == 0
    assert AuditLog.query.count() == 0
    assert User.query.count() == 1
    assert Student.query.count() == 3
    assert created == 9
    assert all(s.owner_id == teacher.id for s in students)
