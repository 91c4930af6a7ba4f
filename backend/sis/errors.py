class SISError(Exception):
    """Base class for errors that are reported to the API caller."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None, field=None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def to_dict(self):
        payload = {"success": False, "message": self.message}
        if self.field:
            payload["field"] = self.field
        return payload


class InvalidInput(SISError):
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(SISError):
    status_code = 401
    default_message = "Session expired. Please login again."


class Forbidden(SISError):
    status_code = 403
    default_message = "Invalid token"


class NotFound(SISError):
    status_code = 404
    default_message = "Not found"


class Conflict(SISError):
    status_code = 409
    default_message = "Already exists"


class PreconditionFailed(SISError):
    status_code = 422
    default_message = "Nothing to report"


class EmailDeliveryError(SISError):
    status_code = 500
    default_message = "Failed to send email. Try again later."


def text_value(value, field):
    """``value`` as a string ('' when absent); non-string JSON values are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInput(f"{field} must be a string", field=field)
    return value
