"""
User Model
==========

Domain model representing a user in the system.
This is a pure domain object with no infrastructure dependencies.
"""
from datetime import datetime
from typing import Optional
from dataclasses import dataclass, field

from firestore_users.domain.exceptions import UserValidationError
from firestore_users.domain.validation import (
    validate_age,
    validate_email,
    validate_name,
    validate_user_fields,
)
from firestore_users.utils.datetime_utils import now


@dataclass
class User:
    """
    User domain model.

    The id is assigned by the document store on insert and is None before
    that. Equality ignores the timestamps.
    """
    name: str
    email: str
    age: int
    id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: now(), compare=False)
    updated_at: datetime = field(default_factory=lambda: now(), compare=False)

    def update_name(self, new_name: str) -> None:
        """Update user name."""
        self.name = validate_name(new_name)
        self.touch()

    def update_email(self, new_email: str) -> None:
        """Update email address."""
        self.email = validate_email(new_email)
        self.touch()

    def update_age(self, new_age: int) -> None:
        """Update age."""
        self.age = validate_age(new_age)
        self.touch()

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.updated_at = now()

    def is_valid(self) -> bool:
        """Check whether name, email and age satisfy the field rules."""
        try:
            validate_user_fields(self.name, self.email, self.age)
        except UserValidationError:
            return False
        return True
