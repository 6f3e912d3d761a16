"""Domain errors carrying a localization key and its resolved message."""

from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status.

    ``message_key`` is the stable contract across languages; ``message`` is
    the text already resolved for the caller's language.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message_key: str, message: Optional[str] = None):
        self.message_key = message_key
        self.message = message if message is not None else message_key
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"
