import logging
import secrets
from datetime import datetime, timedelta

from flask import current_app
from flask_jwt_extended import create_access_token

from sis.extensions import db
from sis.errors import InvalidInput, Conflict, Unauthorized, text_value
from sis.models import User, TokenBlocklist, PasswordReset
from sis.services.email import send_otp_email, send_new_password_email

logger = logging.getLogger(__name__)


def _normalize_email(email):
    return text_value(email, "email").strip().lower()


def _check_password_length(password, field="password"):
    min_length = current_app.config.get("PASSWORD_MIN_LENGTH", 6)
    if len(text_value(password, field)) < min_length:
        raise InvalidInput(f"Password must be at least {min_length} characters", field=field)


def signup(name, email, password):
    name = text_value(name, "name").strip()
    email = _normalize_email(email)
    password = text_value(password, "password")
    if not name or not email or not password:
        raise InvalidInput("All fields are required")
    _check_password_length(password)

    if User.query.filter_by(email=email).first():
        raise Conflict("User already exists with this email")

    user = User(name=name, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info("Teacher registered: %s", user.email)
    return user


def authenticate(email, password):
    email = _normalize_email(email)
    password = text_value(password, "password")
    if not email or not password:
        raise InvalidInput("Email and password are required")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        raise Unauthorized("Invalid email or password")
    return user


def issue_token(user):
    return create_access_token(identity=str(user.id), additional_claims={"email": user.email})


def revoke_token(jwt_payload):
    token_block = TokenBlocklist(
        jti=jwt_payload["jti"],
        token_type=jwt_payload.get("type", "access"),
        user_id=int(jwt_payload["sub"]),
        expires_at=datetime.fromtimestamp(jwt_payload["exp"]),
    )
    db.session.add(token_block)
    db.session.commit()


def generate_otp():
    return str(secrets.randbelow(900000) + 100000)


def request_password_reset(email):
    """
    Email a 6-digit OTP to the teacher registered under ``email``.

    Returns the user, or None when no account matches; callers answer the
    same way in both cases.
    """
    user = User.query.filter_by(email=_normalize_email(email)).first()
    if not user:
        return None

    ttl = current_app.config.get("OTP_TTL_MINUTES", 10)
    reset = PasswordReset.query.filter_by(user_id=user.id).first()
    if reset is None:
        reset = PasswordReset(user_id=user.id)
        db.session.add(reset)
    reset.token = generate_otp()
    reset.expires_at = datetime.utcnow() + timedelta(minutes=ttl)
    db.session.commit()

    send_otp_email(user.email, reset.token)
    return user


def reset_password(otp, new_password=None):
    """
    Consume a valid OTP. With ``new_password`` the password is set to it;
    without one a random password is generated and emailed to the teacher.
    """
    if not otp:
        raise InvalidInput("OTP required", field="token")
    if new_password is not None:
        _check_password_length(new_password, field="newPassword")

    reset = PasswordReset.query.filter(
        PasswordReset.token == str(otp),
        PasswordReset.expires_at > datetime.utcnow(),
    ).first()
    if not reset:
        raise InvalidInput("Invalid or expired OTP", field="token")

    user = reset.user
    generated = new_password is None
    password = secrets.token_urlsafe(12) if generated else new_password
    user.set_password(password)
    db.session.delete(reset)
    db.session.commit()

    if generated:
        send_new_password_email(user.email, password)
    logger.info("Password reset for %s", user.email)
    return user
