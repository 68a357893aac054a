"""Error taxonomy shared by the data access layer and the HTTP API.

Each error carries the HTTP status it maps to, so the API can render it as
an ``ErrorResponse`` envelope without a lookup table.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional


class ForumError(Exception):
    """Base class for every error raised by the data access layer."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred. Please try again later."

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def details(self) -> Optional[dict[str, Any]]:
        return None


class ValidationError(ForumError):
    """Missing or malformed input. The caller should re-prompt."""

    status_code = 400
    default_message = "Invalid input data. Please check your fields and try again."

    def __init__(self, message: Optional[str] = None, *, missing_fields: Iterable[str] = ()):
        self.missing_fields = list(missing_fields)
        if message is None and self.missing_fields:
            message = f"Missing required fields: {', '.join(self.missing_fields)}"
        super().__init__(message)

    def details(self) -> Optional[dict[str, Any]]:
        if not self.missing_fields:
            return None
        return {"missingFields": self.missing_fields}


class Unauthorized(ForumError):
    """Missing or rejected credential. The caller should send the user to log in."""

    status_code = 401
    default_message = "You must be logged in to perform this action"


class Forbidden(ForumError):
    status_code = 403
    default_message = "You don't have permission to access this resource"


class NotFound(ForumError):
    status_code = 404
    default_message = "The requested resource was not found"


class UpstreamError(ForumError):
    """The remote backend failed or answered with something unusable."""

    status_code = 502
    default_message = "An unexpected error occurred. Please try again later."

    def __init__(self, message: Optional[str] = None, *, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(message)

    def details(self) -> Optional[dict[str, Any]]:
        if self.upstream_status is None:
            return None
        return {"upstreamStatus": self.upstream_status}


class InvalidArgument(ForumError):
    """Programmer error, e.g. a non-positive page size handed to the paginator."""

    status_code = 500
    default_message = "Invalid argument"


__all__ = [
    "ForumError",
    "ValidationError",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "UpstreamError",
    "InvalidArgument",
]
