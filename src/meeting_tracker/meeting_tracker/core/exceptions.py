class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an id has no matching row."""


class AuthenticationError(DomainError):
    """Raised when login credentials or the access token are missing/wrong."""


class AuthorizationError(DomainError):
    """Raised when an access token is invalid or expired."""


class StorageError(DomainError):
    """Raised when the underlying database query fails."""
