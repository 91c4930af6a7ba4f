from flask import Blueprint, request, jsonify
from sis.attendance import roster_with_latest_attendance
from sis.reports import generate_report
from utils.decorators import teacher_required

reports_bp = Blueprint("reports", __name__)


@reports_bp.route('', methods=['GET'])
@teacher_required
def attendance_report(teacher):
    roster = roster_with_latest_attendance(teacher.id)
    report = generate_report(roster, request.args.get("period", "daily"))
    return jsonify({"success": True, "data": report}), 200
