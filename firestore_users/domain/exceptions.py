"""
User Domain Errors
==================

Typed errors raised by the repository and service layers.
Callers branch on the exception class, never on the message text.
"""


class UserError(Exception):
    """Base class for all user management errors."""


class UserValidationError(UserError, ValueError):
    """Input is malformed, out of range, or violates a precondition."""


class DuplicateEmailError(UserValidationError):
    """The email address already belongs to another user."""

    def __init__(self, email: str):
        super().__init__(f"User with email '{email}' already exists")
        self.email = email


class UserNotFoundError(UserValidationError):
    """An operation required an existing user and none was found."""

    def __init__(self, user_id: str):
        super().__init__(f"User with ID '{user_id}' not found")
        self.user_id = user_id


class UserStoreError(UserError):
    """The document store failed or could not be reached."""
