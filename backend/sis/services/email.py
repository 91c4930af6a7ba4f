from smtplib import SMTPException

from flask import current_app
from flask_mail import Message

from sis.extensions import mail
from sis.errors import EmailDeliveryError


def _send(to_email, subject, html):
    msg = Message(subject=subject, recipients=[to_email], html=html)
    try:
        mail.send(msg)
    except (SMTPException, OSError):
        current_app.logger.exception("Email delivery to %s failed", to_email)
        raise EmailDeliveryError()
    current_app.logger.info("Email '%s' sent to %s", subject, to_email)


def send_otp_email(to_email, otp):
    ttl = current_app.config.get("OTP_TTL_MINUTES", 10)
    _send(
        to_email,
        "Your SIS OTP Code",
        f'<h1 style="color:#667eea;font-size:3em;">{otp}</h1><p>Valid {ttl} min</p>',
    )


def send_new_password_email(to_email, new_password):
    _send(
        to_email,
        "New SIS Password",
        f"<h2>New Password: <strong>{new_password}</strong></h2><p>Login now!</p>",
    )
