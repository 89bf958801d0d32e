# worldbuilder/errors.py
"""
Domain errors raised by services and the request dispatchers.

Each error carries the HTTP status it maps to; the handlers installed in
``worldbuilder.main`` turn them into the ``{"ok": false, "error": ...}``
envelope.
"""
from typing import Optional

from fastapi import status


class WorldbuilderError(Exception):
    """Base class for errors that are safe to show to the client."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        self.code = code
        super().__init__(self.message)


class ValidationError(WorldbuilderError):
    """Missing or malformed input, or an unrecognized operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"


class UnauthorizedError(WorldbuilderError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(WorldbuilderError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(WorldbuilderError):
    """Duplicate value for a unique key."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
