"""
Application error taxonomy.

Services raise these; the HTTP boundary in ``main.py`` renders them as
``{"detail": message}`` with the matching status code.
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AppError):
    """Missing or malformed request fields."""

    status_code = 400
    default_message = "Invalid input"


class UnauthorizedError(AppError):
    """No credential was presented."""

    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Credential rejected or authorization denied."""

    status_code = 403
    default_message = "Forbidden access"


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = 404
    default_message = "Not found"


class InternalFailureError(AppError):
    """Store or payment processor failure."""

    status_code = 500
    default_message = "Internal server error"
