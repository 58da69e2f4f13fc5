"""Domain error kinds and their HTTP status codes.

Every error the service and auth layers raise on purpose is a subclass of
ApiError. The API registers a single handler for ApiError that renders
``{statusCode, message, error}``; anything else is an internal failure and
is reported as a 500 by the fallback handler.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class ApiError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: Any):
        self.message = message
        super().__init__(message if isinstance(message, str) else repr(message))

    @property
    def error(self) -> str:
        return HTTPStatus(self.status_code).phrase

    def to_dict(self) -> dict[str, Any]:
        return {
            "statusCode": int(self.status_code),
            "message": self.message,
            "error": self.error,
        }


class ValidationError(ApiError):
    """Bad input shape or range, or an input that references missing records."""

    status_code = HTTPStatus.BAD_REQUEST


class AuthenticationError(ApiError):
    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: Any = "Unauthorized"):
        super().__init__(message)


class AuthorizationError(ApiError):
    status_code = HTTPStatus.FORBIDDEN

    def __init__(self, message: Any = "Forbidden resource"):
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = HTTPStatus.NOT_FOUND


class ConflictError(ApiError):
    status_code = HTTPStatus.CONFLICT
