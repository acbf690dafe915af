class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(ValidationError):
    """Raised when a user already holds the role being assigned."""


class AuthenticationError(DomainError):
    """Raised when login credentials or invitation tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataAccessError(DomainError):
    """Raised when the database rejects or fails an operation."""


class DuplicateKeyError(DataAccessError):
    """Raised on a unique-constraint violation."""


class InviteDeliveryError(DomainError):
    """Raised when an invitation email could not be delivered."""
