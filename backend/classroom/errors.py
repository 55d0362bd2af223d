"""Error kinds raised by the classroom services.

Every failure a service reports is one of these. The HTTP layer maps each
kind to a status code in ``main.py``; ``InternalError`` never carries store
details back to the caller.
"""

from typing import Optional

from fastapi import status


class ClassroomError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(ClassroomError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class ForbiddenError(ClassroomError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(ClassroomError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(ClassroomError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(ClassroomError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
