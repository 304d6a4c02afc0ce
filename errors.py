"""
Error taxonomy for the request layer.

Every error carries a user-visible ``message`` and the HTTP status it maps to.
Handlers in ``app.py`` render them as ``{"message": ...}`` JSON bodies.
"""


class ApiError(Exception):
    """Base class for errors reported to the HTTP client."""

    status_code = 500
    default_message = "Request failed"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"message": self.message}


class ValidationError(ApiError):
    """Malformed or missing fields."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class UnauthenticatedError(ApiError):
    """No principal is attached to the request."""

    status_code = 401
    default_message = "Not authenticated"


class InvalidCredentials(UnauthenticatedError):
    default_message = "Invalid username or password"


class UnauthorizedError(ApiError):
    """A principal is present but lacks the privilege."""

    status_code = 403
    default_message = "Unauthorized"


class ConflictError(ApiError):
    # Duplicate username/email is reported as 400 to existing clients.
    status_code = 400
    default_message = "Already exists"


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal server error"
