from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthorizationError(UserError):
    """Raised when a signed-in identity is not allowed to use the service."""

    def __init__(self, message: str = "Failed to authorize user") -> None:
        super().__init__(message)


class LoginRequiredError(UserError):
    """Raised when a protected page is requested without a session."""

    def __init__(self, message: str = "Login required") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ServiceError(Exception):
    """Base class for failures of external collaborators (store, identity provider).

    Messages may contain internal details and are logged, not shown.
    """


class StorageError(ServiceError):
    """Raised when the backing document store is unavailable."""


class ExternalProviderError(ServiceError):
    """Raised when the identity provider token exchange or profile fetch fails."""
