from .User import User, TokenBlocklist, PasswordReset
from .Student import Student
from .AttendanceRecord import AttendanceRecord
from .AuditLog import AuditLog
from .base import TimestampMixin, GradeEnum, AttendanceStatus, DEFAULT_GRADE
from sis.extensions import db
