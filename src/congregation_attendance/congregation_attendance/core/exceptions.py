class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced unit or member does not exist."""


class AuthenticationError(DomainError):
    """Raised when the access password is invalid."""
