"""
Domain error taxonomy.

Every failure that can reach a caller is one of these.  ``api.middleware``
turns them into JSON responses; the ``public_message`` is the only text a
client ever sees, so messages for ``Unauthorized`` and ``NotFound`` are
fixed and carry no hint about the underlying cause.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    code: str = "internal"
    public_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.public_message
        super().__init__(self.message)


class InvalidInput(AppError):
    status_code = 422
    code = "invalid_input"
    public_message = "Invalid input"


class Unauthorized(AppError):
    """Missing, invalid or expired token, or bad login credentials.

    The message is not configurable: every cause renders identically.
    """

    status_code = 401
    code = "unauthorized"
    public_message = "Not authenticated"

    def __init__(self) -> None:
        super().__init__(None)


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    public_message = "Not found"


class DuplicateEmail(AppError):
    status_code = 409
    code = "duplicate_email"
    public_message = "Email already registered"

    def __init__(self) -> None:
        super().__init__(None)


class Internal(AppError):
    status_code = 500
    code = "internal"
    public_message = "Internal server error"

    def __init__(self) -> None:
        super().__init__(None)
