"""
core/errors.py -- Error taxonomy shared by the auth and employee layers.

Every error the API answers deliberately is an ApiError subclass. The
exception handler in api/main.py renders them all the same way:

    {"message": <message>, **extra}   with status_code

Anything that is NOT an ApiError (store faults, bugs) falls through to the
catch-all handler, which logs it and answers a generic 500.

Layer rule: no imports from api/, auth/, or employees/.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base class for errors that map to a specific HTTP response."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any]:
        return {"message": self.message, **self.extra}


class ValidationError(ApiError):
    """Malformed request input (400)."""

    status_code = 400
    default_message = "Request validation failed."


class DuplicateEntity(ApiError):
    """A uniqueness constraint was violated (400)."""

    status_code = 400
    default_message = "Entity already exists."


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found."


class Unauthorized(ApiError):
    """Bad credentials or an expired token (401)."""

    status_code = 401
    default_message = "Unauthorized."


class MissingToken(Unauthorized):
    """No token supplied on a protected route (403)."""

    status_code = 403
    default_message = "No token provided."


class ServerFault(ApiError):
    status_code = 500
