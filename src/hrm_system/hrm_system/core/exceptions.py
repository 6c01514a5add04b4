class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a write collides with an existing row (duplicate key, double check-in)."""


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token are missing or wrong."""

    status_code = 401


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is present but malformed, tampered or expired."""

    status_code = 403


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class EmployeeProfileNotFound(NotFoundError):
    """Raised when the caller's user account has no linked employee row."""

    def __init__(self, message: str = "Employee profile not found"):
        super().__init__(message)
