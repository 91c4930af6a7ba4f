from sis.extensions import db
from .base import TimestampMixin, DEFAULT_GRADE

class Student(db.Model, TimestampMixin):
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(512), nullable=False)
    grade = db.Column(db.String(20), nullable=False, default=DEFAULT_GRADE)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)

    owner = db.relationship('User', back_populates='students')
    attendance_records = db.relationship(
        'AttendanceRecord',
        back_populates='student',
        lazy=True,
        cascade="all, delete-orphan",
    )

    def to_dict(self, attendance=None, attendance_updated_at=None, include_attendance=False):
        data = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "grade": self.grade,
            "ownerId": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_attendance:
            data["attendance"] = attendance
            data["attendanceUpdatedAt"] = attendance_updated_at.isoformat() if attendance_updated_at else None
        return data
