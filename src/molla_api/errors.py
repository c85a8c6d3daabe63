"""
molla_api.errors

Domain error taxonomy.

Responsibilities:
- Define the user-facing errors raised by services and auth components.
- Carry a stable `kind` tag and HTTP status for the API error payload.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)


class AppError(Exception):
    """
    Base class for errors that are safe to show to API callers.
    """

    kind: str = "AppError"
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyExists(AppError):
    kind = "AlreadyExists"
    status_code = HTTP_409_CONFLICT
    default_message = "Resource already exists"


class ForbiddenRole(AppError):
    kind = "ForbiddenRole"
    status_code = HTTP_403_FORBIDDEN
    default_message = "Cannot register with this role"


class InvalidCredentials(AppError):
    # One message for unknown email and wrong password alike.
    kind = "InvalidCredentials"
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Unauthenticated(AppError):
    kind = "Unauthenticated"
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    kind = "Forbidden"
    status_code = HTTP_403_FORBIDDEN
    default_message = "You don't have permission to access this resource"


class NotFound(AppError):
    kind = "NotFound"
    status_code = HTTP_404_NOT_FOUND
    default_message = "Resource not found"


# --- Module Notes -----------------------------------------------------------
# Token decode errors live in `auth.jwt`; they never reach callers directly because the
# gatekeeper folds them into an anonymous request.
