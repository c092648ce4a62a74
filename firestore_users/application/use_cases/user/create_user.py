"""
Create User Use Cases
=====================

Business use cases for registering one or several users.
"""
import logging
from typing import List

from firestore_users.domain.exceptions import DuplicateEmailError, UserValidationError
from firestore_users.domain.models.user import User
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.domain.validation import validate_user_fields

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a single user.

    Validates the fields, rejects an email that is already taken, then
    inserts. The uniqueness check and the insert are not atomic.
    """

    def __init__(self, user_repository: UserRepository):
        """
        Initialize use case with repository.

        Args:
            user_repository: Repository for user persistence
        """
        self._repository = user_repository

    def execute(self, name: str, email: str, age: int) -> User:
        """
        Execute the create user use case.

        Args:
            name: Display name
            email: Email address, unique across users
            age: Age in years

        Returns:
            Created user entity with its assigned id

        Raises:
            UserValidationError: If input validation fails
            DuplicateEmailError: If the email is already taken
        """
        name, email, age = validate_user_fields(name, email, age)

        if self._repository.exists_by_email(email):
            raise DuplicateEmailError(email)

        return self._repository.create(User(name=name, email=email, age=age))


class CreateUsersUseCase:
    """Use case for creating a batch of users with a single bulk insert."""

    def __init__(self, user_repository: UserRepository):
        self._repository = user_repository

    def execute(self, users: List[User]) -> List[User]:
        """
        Validate every user, check every email, then insert them all.

        Raises:
            UserValidationError: If the list is empty or any user is invalid
            DuplicateEmailError: If an email repeats inside the batch or is
                already stored
        """
        if not users:
            raise UserValidationError("Users list cannot be empty")

        seen_emails = set()
        for user in users:
            if user is None:
                raise UserValidationError("User cannot be None")
            user.name, user.email, user.age = validate_user_fields(user.name, user.email, user.age)

            if user.email in seen_emails or self._repository.exists_by_email(user.email):
                raise DuplicateEmailError(user.email)
            seen_emails.add(user.email)

        logger.debug(f"Validated batch of {len(users)} users")
        return self._repository.create_many(users)
