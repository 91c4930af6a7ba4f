from flask import Blueprint, request, jsonify, current_app
from sis.attendance import mark_attendance, roster_with_latest_attendance, attendance_history
from sis.students import create_student, delete_student
from sis.reports import attendance_stats
from sis.extensions import limiter
from utils.audit import log_event
from utils.decorators import teacher_required, json_body

students_bp = Blueprint("students", __name__)


@students_bp.route('', methods=['GET'])
@teacher_required
def list_students(teacher):
    students = roster_with_latest_attendance(teacher.id)
    return jsonify({"success": True, "data": students}), 200


@students_bp.route('/stats', methods=['GET'])
@teacher_required
def student_stats(teacher):
    stats = attendance_stats(roster_with_latest_attendance(teacher.id))
    return jsonify({"success": True, "data": stats}), 200


@students_bp.route('', methods=['POST'])
@teacher_required
def add_student(teacher):
    student = create_student(teacher.id, json_body())

    log_event("STUDENT_CREATED", user_id=teacher.id, ip=request.remote_addr, description=student.username)
    return jsonify({"success": True, "message": f"Student {student.username} added successfully!", "data": student.to_dict()}), 201


@students_bp.route('/<int:student_id>', methods=['DELETE'])
@teacher_required
def remove_student(teacher, student_id):
    username = delete_student(teacher.id, student_id)

    log_event("STUDENT_DELETED", user_id=teacher.id, ip=request.remote_addr, description=username)
    return jsonify({"success": True, "message": "Student deleted successfully!"}), 200


@students_bp.route('/<int:student_id>/attendance', methods=['POST'])
@limiter.limit("120 per minute")
@teacher_required
def mark_student_attendance(teacher, student_id):
    status = json_body().get("status")
    record, created = mark_attendance(teacher.id, student_id, status)

    verb = "Marked as" if created else "Updated to"
    log_event("ATTENDANCE_MARKED", user_id=teacher.id, ip=request.remote_addr,
              description=f"student={student_id} status={record.status} created={created}")
    return jsonify({
        "success": True,
        "message": f"{verb} {record.status.upper()}",
        "data": record.to_dict()
    }), 200


@students_bp.route('/<int:student_id>/attendance/history', methods=['GET'])
@teacher_required
def student_attendance_history(teacher, student_id):
    days = request.args.get("days", current_app.config.get("HISTORY_DEFAULT_DAYS", 30))
    student, records = attendance_history(teacher.id, student_id, days)

    return jsonify({
        "success": True,
        "data": {
            "student": {"username": student.username, "email": student.email},
            "records": [r.to_dict() for r in records]
        }
    }), 200
