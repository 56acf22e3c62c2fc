class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateUsernameError(ValidationError):
    """Raised when registering a username that is already taken."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class InvalidSessionError(DomainError):
    """Raised when a bearer token is missing, expired or revoked."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ConflictError(DomainError):
    """Raised when concurrent writers keep invalidating each other."""
