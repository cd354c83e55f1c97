"""Domain errors raised by the lodging services.

Each error carries a human-readable message and the HTTP status code the API
layer answers with. Services never catch these; callers translate them.
"""

from fastapi import status


class LodgingError(Exception):
    """Base class for all errors raised by the services."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(LodgingError):
    """Missing or malformed input (missing fields, bad dates, capacity)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(LodgingError):
    """A referenced guest, room or booking does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(LodgingError):
    """Uniqueness violation, overlapping booking, or a blocked delete."""

    status_code = status.HTTP_409_CONFLICT
