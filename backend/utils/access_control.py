from sis.models import Student
from sis.errors import NotFound


def get_owned_student(owner_id, student_id):
    """
    Returns the student only if it exists AND belongs to ``owner_id``.
    - Existence and ownership are checked in one query, so a student owned by
      another teacher is indistinguishable from a missing one.
    - Raises NotFound otherwise.
    """
    if owner_id is None:
        raise ValueError("No owner provided")

    student = Student.query.filter_by(id=student_id, owner_id=int(owner_id)).first()
    if not student:
        raise NotFound("Student not found")
    return student
