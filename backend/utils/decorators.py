from functools import wraps
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask import request
from sis.models import User
from sis.errors import Unauthorized, InvalidInput

def teacher_required(fn):
    """
    Require a valid bearer token and pass the owning teacher to the view.
    Usage:
        @teacher_required
        def view(teacher, ...): ...
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        user_id = get_jwt_identity()
        if not user_id:
            raise Unauthorized("Missing or invalid token")

        teacher = User.query.get(int(user_id))
        if not teacher:
            raise Unauthorized("User not found")

        return fn(teacher, *args, **kwargs)
    return wrapper

def json_body():
    """Request JSON as a dict; a body that is not a JSON object is rejected."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data
