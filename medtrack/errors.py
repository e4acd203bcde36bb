# medtrack/errors.py
"""
Error taxonomy shared by services and controllers.

Services raise these; the error handler registered in ``create_app`` turns
them into ``{"success": false, "message": ...}`` responses with the matching
status code.
"""


class MedTrackError(Exception):
    status_code = 500
    reason = "internal"
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class Unauthenticated(MedTrackError):
    status_code = 401
    reason = "unauthenticated"
    default_message = "Authentication required"


class Forbidden(MedTrackError):
    status_code = 403
    reason = "forbidden"
    default_message = "Not allowed"


class NotFound(MedTrackError):
    status_code = 404
    reason = "not_found"
    default_message = "Not found"


class Conflict(MedTrackError):
    status_code = 409
    reason = "conflict"
    default_message = "Already exists"


class ValidationError(MedTrackError):
    status_code = 400
    reason = "validation"
    default_message = "Invalid request"


ERRORS_BY_REASON = {
    cls.reason: cls for cls in (Unauthenticated, Forbidden, NotFound, Conflict, ValidationError)
}
