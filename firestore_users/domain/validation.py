"""
User Validation Rules
=====================

Field rules shared by the User entity and the service layer.
Every check is fail-fast: the first violation is raised.
"""
import re
from typing import Any, Optional, Tuple

from firestore_users.domain.exceptions import UserValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
AGE_MIN = 0
AGE_MAX = 150

NAME_PATTERN = re.compile(r"[A-Za-z \-']+")
EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w.-]+\.[A-Za-z]{2,}", re.ASCII)


def validate_name(name: Any) -> str:
    """Validate a user name and return it trimmed."""
    if name is None:
        raise UserValidationError("Name cannot be empty")
    if not isinstance(name, str):
        raise UserValidationError("Name must be text")
    if not name.strip():
        raise UserValidationError("Name cannot be empty")

    name = name.strip()
    if len(name) < NAME_MIN_LENGTH:
        raise UserValidationError(f"Name must be at least {NAME_MIN_LENGTH} characters long")
    if len(name) > NAME_MAX_LENGTH:
        raise UserValidationError(f"Name cannot be longer than {NAME_MAX_LENGTH} characters")
    if not NAME_PATTERN.fullmatch(name):
        raise UserValidationError("Name can only contain letters, spaces, hyphens, and apostrophes")
    return name


def validate_email(email: Any) -> str:
    """Validate an email address and return it trimmed."""
    if email is None:
        raise UserValidationError("Email cannot be empty")
    if not isinstance(email, str):
        raise UserValidationError("Email must be text")
    if not email.strip():
        raise UserValidationError("Email cannot be empty")

    email = email.strip()
    if len(email) > EMAIL_MAX_LENGTH:
        raise UserValidationError(f"Email cannot be longer than {EMAIL_MAX_LENGTH} characters")
    if not EMAIL_PATTERN.fullmatch(email):
        raise UserValidationError("Invalid email format")
    return email


def validate_age(age: Any) -> int:
    """Validate an age in years."""
    if age is None:
        raise UserValidationError("Age cannot be empty")
    # bool is a subclass of int
    if isinstance(age, bool) or not isinstance(age, int):
        raise UserValidationError("Age must be a whole number")
    if age < AGE_MIN:
        raise UserValidationError("Age cannot be negative")
    if age > AGE_MAX:
        raise UserValidationError(f"Age cannot be greater than {AGE_MAX}")
    return age


def validate_user_fields(name: Any, email: Any, age: Any) -> Tuple[str, str, int]:
    """Validate name, email and age in that order."""
    return validate_name(name), validate_email(email), validate_age(age)


def validate_age_range(min_age: int, max_age: int, upper_limit: Optional[int] = None) -> None:
    """
    Validate an inclusive age range.

    Args:
        min_age: Lower bound
        max_age: Upper bound
        upper_limit: Optional ceiling for max_age

    Raises:
        UserValidationError: If either bound is negative, the bounds are
            inverted, or max_age exceeds upper_limit
    """
    if min_age < 0 or max_age < 0:
        raise UserValidationError("Age cannot be negative")
    if min_age > max_age:
        raise UserValidationError("Minimum age cannot be greater than maximum age")
    if upper_limit is not None and max_age > upper_limit:
        raise UserValidationError(f"Maximum age seems unrealistic (over {upper_limit})")
