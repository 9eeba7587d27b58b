class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a uniqueness constraint would be violated."""


class AuthenticationError(DomainError):
    """Raised when credentials are missing or invalid."""


class AuthorizationError(DomainError):
    """Raised when a token is rejected or the caller lacks permission."""
