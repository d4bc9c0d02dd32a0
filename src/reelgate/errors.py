from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found.

    `details` carries a human-readable explanation; it is only produced after
    authorization, so it may name the missing file but never its full path.
    """

    def __init__(self, message: str = "Not found", details: str | None = None) -> None:
        super().__init__(message)
        self.details = details


class AuthenticationError(UserError):
    """Raised when a session token is missing, unknown or expired."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a media token is missing, unknown or expired."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class RangeNotSatisfiableError(UserError):
    """Raised when a Range header is malformed or outside the resource."""

    def __init__(self, size: int, message: str = "Requested range not satisfiable") -> None:
        super().__init__(message)
        self.size = size
