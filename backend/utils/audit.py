import logging
import os
from datetime import datetime

AUDIT_LOG_FILE = os.path.join("logs", "audit.log")

logger = logging.getLogger("sis.audit")


def log_event(event_type, user_id=None, ip=None, description=None, level="INFO"):
    """
    Append an audit line for a teacher action to the audit log file.

    Sign-ins, roster changes and attendance marks all land here. The path
    comes from ``AUDIT_LOG_FILE`` in the environment (default
    ``logs/audit.log``). The same line goes to the ``sis.audit`` logger at
    ``level``.

    Parameters:
        event_type (str): e.g. LOGIN_SUCCESS, STUDENT_CREATED, ATTENDANCE_MARKED.
        user_id (int|None): The acting teacher, if known.
        ip (str|None): Caller address, if known.
        description (str|None): Additional context.
        level (str): INFO, WARNING or ERROR.
    """
    log_file_path = os.getenv("AUDIT_LOG_FILE", AUDIT_LOG_FILE)
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
    log_entry = (
        f"[{timestamp}] [{level.upper()}] EVENT: {event_type} | "
        f"TEACHER: {user_id or 'N/A'} | IP: {ip or 'N/A'} | DESC: {description or 'N/A'}"
    )

    with open(log_file_path, "a") as log_file:
        log_file.write(log_entry + "\n")

    logger.log(getattr(logging, level.upper(), logging.INFO), log_entry)
