from sis.extensions import db
from .base import TimestampMixin

class AttendanceRecord(db.Model, TimestampMixin):
    __tablename__ = 'attendance_records'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id', ondelete="CASCADE"), nullable=False)
    status = db.Column(db.String(10), nullable=False)  # 'present', 'absent' or 'late'
    date = db.Column(db.DateTime, nullable=False)  # local time of the latest mark
    day = db.Column(db.Date, nullable=False)  # calendar day of `date`

    student = db.relationship('Student', back_populates='attendance_records')

    __table_args__ = (
        db.UniqueConstraint('student_id', 'day', name='uq_attendance_student_day'),
        db.Index('ix_attendance_student_date', 'student_id', 'date'),
        db.Index('ix_attendance_status', 'status'),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "studentId": self.student_id,
            "status": self.status,
            "date": self.date.isoformat(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
