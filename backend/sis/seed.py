import os
from datetime import datetime, timedelta
from sis.extensions import db
from sis.models import User, Student, AttendanceRecord, AuditLog, PasswordReset, TokenBlocklist
from werkzeug.security import generate_password_hash


def seed_data(reset=False):
    """Demo teacher with a small roster and a few days of attendance."""
    if reset:
        for model in (AttendanceRecord, Student, TokenBlocklist, PasswordReset, AuditLog, User):
            model.query.delete()
        db.session.commit()

    teacher_password = os.getenv("DEMO_TEACHER_PASSWORD", "teacherpass")

    teacher = User.query.filter_by(email="teacher@sis.local").first()
    if not teacher:
        teacher = User(name="Demo Teacher", email="teacher@sis.local")
        teacher.set_password(teacher_password)
        db.session.add(teacher)
        db.session.commit()

    roster = [
        ("thabo", "thabo@students.sis.local", "Grade 7"),
        ("ayanda", "ayanda@students.sis.local", "Grade 9"),
        ("sipho", "sipho@students.sis.local", "Grade 12"),
    ]
    students = []
    for username, email, grade in roster:
        student = Student.query.filter_by(username=username).first()
        if not student:
            student = Student(
                username=username,
                email=email,
                password_hash=generate_password_hash("studentpass"),
                grade=grade,
                owner_id=teacher.id,
            )
            db.session.add(student)
        students.append(student)
    db.session.commit()

    # one record per student per day, skipping days already recorded
    statuses = ["present", "late", "absent"]
    today = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)
    created = 0
    for offset in range(3):
        marked_at = today - timedelta(days=offset)
        for index, student in enumerate(students):
            exists = AttendanceRecord.query.filter_by(student_id=student.id, day=marked_at.date()).first()
            if exists:
                continue
            db.session.add(AttendanceRecord(
                student_id=student.id,
                status=statuses[(index + offset) % len(statuses)],
                date=marked_at,
                day=marked_at.date(),
            ))
            created += 1
    db.session.commit()

    return teacher, students, created
