from flask import Blueprint, request, jsonify
from flask_jwt_extended import get_jwt
from flask_limiter.util import get_remote_address
from sis.auth import signup, authenticate, issue_token, revoke_token, request_password_reset, reset_password
from sis.extensions import limiter
from sis.errors import InvalidInput, SISError, text_value
from utils.audit import log_event
from utils.decorators import teacher_required, json_body

auth_bp = Blueprint('auth', __name__)


def _email_key():
    data = request.get_json(silent=True)
    if isinstance(data, dict) and data.get("email"):
        return str(data["email"]).strip().lower()
    return get_remote_address()


@auth_bp.route('/signup', methods=['POST'])
@limiter.limit("5 per minute", override_defaults=False)
def register():
    data = json_body()
    user = signup(data.get('name'), data.get('email'), data.get('password'))

    log_event("SIGNUP", user_id=user.id, ip=request.remote_addr, description=f"{user.email} registered")
    return jsonify({
        "success": True,
        "message": "Registration successful! You can now log in.",
        "data": user.to_dict()
    }), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute", override_defaults=False)
def login():
    data = json_body()
    ip = request.remote_addr

    try:
        user = authenticate(data.get('email'), data.get('password'))
    except SISError:
        log_event("LOGIN_FAILED", ip=ip, description=f"Failed login attempt for {data.get('email')}", level="WARNING")
        raise

    log_event("LOGIN_SUCCESS", user_id=user.id, ip=ip, description=f"{user.email} logged in")
    return jsonify({
        "success": True,
        "data": dict(user.to_dict(), token=issue_token(user))
    }), 200


@auth_bp.route('/me', methods=['GET'])
@teacher_required
def get_current_user(teacher):
    return jsonify({"success": True, "data": teacher.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@teacher_required
def logout(teacher):
    revoke_token(get_jwt())
    log_event("LOGOUT", user_id=teacher.id, ip=request.remote_addr)
    return jsonify({"success": True, "message": "Successfully logged out"}), 200


@auth_bp.route('/forgot-password', methods=['POST'])
@limiter.limit("3 per 15 minutes", key_func=_email_key, override_defaults=False)
def forgot_password():
    data = json_body()
    email = text_value(data.get('email'), "email").strip()
    if not email:
        raise InvalidInput("Email required", field="email")

    user = request_password_reset(email)
    if user:
        log_event("PASSWORD_RESET_REQUESTED", user_id=user.id, ip=request.remote_addr)
    return jsonify({"success": True, "message": "If email exists, OTP sent."}), 200


@auth_bp.route('/reset-password', methods=['POST'])
def reset():
    data = json_body()
    user = reset_password(data.get('token') or data.get('otp'), data.get('newPassword'))

    log_event("PASSWORD_RESET", user_id=user.id, ip=request.remote_addr)
    if data.get('newPassword') is None:
        message = "New password sent to your email! Login with it now."
    else:
        message = "Password reset! You can now login."
    return jsonify({"success": True, "message": message}), 200
