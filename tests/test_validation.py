from __future__ import annotations

import pytest

from firestore_users.domain.exceptions import UserValidationError
from firestore_users.domain.validation import (
    validate_age,
    validate_age_range,
    validate_email,
    validate_name,
    validate_user_fields,
)


@pytest.mark.parametrize("name", ["Jo", "Mary O'Neil", "Jean-Luc Picard", "  Alice  "])
def test_validate_name_accepts_and_trims(name: str) -> None:
    assert validate_name(name) == name.strip()


@pytest.mark.parametrize(
    "name, message",
    [
        (None, "empty"),
        ("   ", "empty"),
        ("A", "at least 2"),
        ("x" * 101, "longer than 100"),
        ("R2D2", "only contain"),
        ("Anna_Lee", "only contain"),
        (123, "must be text"),
        (["John", "Doe"], "must be text"),
    ],
)
def test_validate_name_rejects(name: str | None, message: str) -> None:
    with pytest.raises(UserValidationError, match=message):
        validate_name(name)


def test_validate_name_checks_trimmed_length() -> None:
    with pytest.raises(UserValidationError, match="at least 2"):
        validate_name("  A  ")


@pytest.mark.parametrize("email", ["john@example.com", "first.last+tag@mail.example.co", "a_b-c@sub-domain.io"])
def test_validate_email_accepts(email: str) -> None:
    assert validate_email(f" {email} ") == email


@pytest.mark.parametrize(
    "email, message",
    [
        ("", "empty"),
        (None, "empty"),
        ("no-at-sign.com", "Invalid email format"),
        ("user@domain", "Invalid email format"),
        ("user@domain.c", "Invalid email format"),
        ("us er@example.com", "Invalid email format"),
        ("a" * 250 + "@example.com", "longer than 254"),
        (42, "must be text"),
    ],
)
def test_validate_email_rejects(email: str | None, message: str) -> None:
    with pytest.raises(UserValidationError, match=message):
        validate_email(email)


@pytest.mark.parametrize("age", [0, 1, 75, 150])
def test_validate_age_accepts_bounds(age: int) -> None:
    assert validate_age(age) == age


@pytest.mark.parametrize("age", [None, -1, 151, True, 30.5, "30"])
def test_validate_age_rejects(age: object) -> None:
    with pytest.raises(UserValidationError):
        validate_age(age)


def test_validate_user_fields_reports_first_violation() -> None:
    with pytest.raises(UserValidationError, match="Name"):
        validate_user_fields("", "not-an-email", -5)


def test_validate_age_range() -> None:
    validate_age_range(25, 35)
    validate_age_range(30, 30)

    with pytest.raises(UserValidationError, match="greater than maximum"):
        validate_age_range(10, 5)
    with pytest.raises(UserValidationError, match="negative"):
        validate_age_range(-1, 5)
    with pytest.raises(UserValidationError, match="unrealistic"):
        validate_age_range(10, 200, upper_limit=150)
