# medtrack/helpers.py
from flask import request


def api_response(success, message, data=None, status_code=200, **extra):
    """Standard envelope; ``extra`` adds top-level keys such as ``medication`` or ``access_token``."""
    body = {
        "success": success,
        "message": message,
        "data": data
    }
    body.update(extra)
    return body, status_code


def json_body():
    """Request JSON as a dict; anything else (missing, malformed, a list) reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
