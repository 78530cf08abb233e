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


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidTypeError(UserError):
    """Raised when a number type is neither built in nor configured for the tenant."""

    def __init__(self, number_type: str) -> None:
        super().__init__(f"Invalid number type: '{number_type}'")
        self.number_type = number_type


class PersistenceError(Exception):
    """Raised when the tenant store fails, times out, or keeps conflicting after retries.

    Not a UserError: the message may contain storage details and is logged, never shown.
    """
