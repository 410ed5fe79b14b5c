"""Custom exception classes."""


class SmartCookException(Exception):
    """Base exception for SmartCook application."""

    pass


class AuthenticationError(SmartCookException):
    """Raised when the caller is not authenticated."""

    pass


class ValidationError(SmartCookException):
    """Raised when input validation fails."""

    pass


class NotFoundError(SmartCookException):
    """Raised when a resource is missing or not owned by the caller."""

    pass


class DatabaseError(SmartCookException):
    """Raised when a query or write against the database fails."""

    pass


class LLMError(SmartCookException):
    """Raised when the language model call fails."""

    pass


class ImageServiceError(SmartCookException):
    """Raised when the image hosting service rejects a request."""

    pass
