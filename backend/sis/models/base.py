from datetime import datetime
from sis.extensions import db
import enum

class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

class GradeEnum(enum.Enum):
    grade7 = "Grade 7"
    grade8 = "Grade 8"
    grade9 = "Grade 9"
    grade10 = "Grade 10"
    grade11 = "Grade 11"
    grade12 = "Grade 12"

    @classmethod
    def values(cls):
        return [g.value for g in cls]

DEFAULT_GRADE = GradeEnum.grade10.value

class AttendanceStatus(enum.Enum):
    present = "present"
    absent = "absent"
    late = "late"

    @classmethod
    def values(cls):
        return [s.value for s in cls]
