class DomainError(Exception):
    """Base exception for registry and admin rule violations."""


class ValidationError(DomainError):
    """Raised for bad input: empty name, duplicate phone, unknown status, unconfirmed reset."""


class NotFoundError(DomainError):
    """Raised when a referenced participant does not exist."""


class AuthenticationError(DomainError):
    """Raised when the admin PIN is invalid."""


class AuthorizationError(DomainError):
    """Raised when a gate (scanning, registration) is closed to the caller."""
