import logging
from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from sis.extensions import db
from sis.errors import InvalidInput, Conflict, text_value
from sis.models import Student, GradeEnum, DEFAULT_GRADE
from utils.access_control import get_owned_student

logger = logging.getLogger(__name__)


def normalize(value, field):
    return text_value(value, field).strip().lower()


def create_student(owner_id, data):
    """Create a student for ``owner_id`` from request data (username, email, password, grade)."""
    username = normalize(data.get("username"), "username")
    email = normalize(data.get("email"), "email")
    password = text_value(data.get("password"), "password")
    grade = text_value(data.get("grade"), "grade").strip() or DEFAULT_GRADE
    min_length = current_app.config.get("PASSWORD_MIN_LENGTH", 6)

    missing = [name for name, value in (("username", username), ("email", email), ("password", password.strip())) if not value]
    if missing:
        raise InvalidInput(f"Missing fields: {', '.join(missing)}", field=missing[0])
    if len(password) < min_length:
        raise InvalidInput(f"Password must be at least {min_length} characters", field="password")
    if grade not in GradeEnum.values():
        raise InvalidInput("Invalid grade", field="grade")

    exists = Student.query.filter(or_(Student.username == username, Student.email == email)).first()
    if exists:
        raise Conflict("Username or email exists")

    student = Student(
        username=username,
        email=email,
        password_hash=generate_password_hash(password),
        grade=grade,
        owner_id=owner_id,
    )
    db.session.add(student)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username or email exists")

    logger.info("New student %s for teacher %s", student.username, owner_id)
    return student


def delete_student(owner_id, student_id):
    """Delete an owned student; its attendance records go with it."""
    student = get_owned_student(owner_id, student_id)
    username = student.username
    db.session.delete(student)
    db.session.commit()
    logger.info("Deleted student %s", username)
    return username
