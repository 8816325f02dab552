"""
Domain errors raised by the repository layer.

Each error carries the HTTP status the API renders it with, so endpoints
never translate them by hand (see the handler registered in main.py).
"""


class JobBoardError(Exception):
    """Base class for recoverable, caller-facing errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(JobBoardError):
    """Payload or filter combination that can never succeed."""

    status_code = 400


class InvalidReferenceError(JobBoardError):
    """A referenced parent row does not exist at create time."""

    status_code = 400


class UnauthorizedError(JobBoardError):
    status_code = 401


class ForbiddenError(JobBoardError):
    status_code = 403


class NotFoundError(JobBoardError):
    status_code = 404


class ConflictError(JobBoardError):
    """Duplicate unique key or duplicate association."""

    status_code = 409
