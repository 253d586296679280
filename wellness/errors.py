"""Error taxonomy shared by the store, the access gate and the handlers.

Each error maps onto exactly one HTTP status.  Handlers never build error
responses themselves; they raise one of these and the exception handlers in
:mod:`wellness.main` render ``{"message": ...}``.
"""

from __future__ import annotations


class WellnessError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(WellnessError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(WellnessError):
    status_code = 401
    default_message = "Access token required"


class Forbidden(WellnessError):
    status_code = 403
    default_message = "Access denied"


class NotFound(WellnessError):
    status_code = 404
    default_message = "Not found"


__all__ = [
    "WellnessError",
    "ValidationFailed",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
]
