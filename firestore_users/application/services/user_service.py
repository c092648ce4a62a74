"""
User Service
============

Application service that coordinates user-related operations.
Mutating operations are delegated to use cases; queries go straight to
the repository after argument checks.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from firestore_users.application.use_cases.user import (
    CreateUserUseCase,
    CreateUsersUseCase,
    DeleteUserUseCase,
    DeleteUsersByAgeRangeUseCase,
    UpdateUserEmailUseCase,
    UpdateUserUseCase,
)
from firestore_users.domain.exceptions import UserValidationError
from firestore_users.domain.models.user import User
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.domain.validation import AGE_MAX, validate_age_range

logger = logging.getLogger(__name__)

MIN_SEARCH_PATTERN_LENGTH = 2


@dataclass
class UserStatistics:
    """Aggregate figures over all stored users."""
    total_users: int = 0
    average_age: float = 0.0
    min_age: int = 0
    max_age: int = 0

    def __str__(self) -> str:
        return (
            f"UserStatistics(total_users={self.total_users}, average_age={self.average_age:.1f}, "
            f"min_age={self.min_age}, max_age={self.max_age})"
        )


class UserService:
    """
    Application service for user operations.

    This service coordinates multiple use cases and provides
    a high-level interface for user management.
    """

    def __init__(self, user_repository: UserRepository):
        """
        Initialize service with repository.

        Args:
            user_repository: Repository for user persistence
        """
        self._repository = user_repository
        self._create_use_case = CreateUserUseCase(user_repository)
        self._create_many_use_case = CreateUsersUseCase(user_repository)
        self._update_use_case = UpdateUserUseCase(user_repository)
        self._update_email_use_case = UpdateUserEmailUseCase(user_repository)
        self._delete_use_case = DeleteUserUseCase(user_repository)
        self._delete_by_age_use_case = DeleteUsersByAgeRangeUseCase(user_repository)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_user(self, name: str, email: str, age: int) -> User:
        """
        Create a new user.

        Args:
            name: Display name
            email: Email address, must not belong to another user
            age: Age in years

        Returns:
            Created user entity
        """
        logger.info(f"Creating user: name={name}, email={email}, age={age}")
        user = self._create_use_case.execute(name=name, email=email, age=age)
        logger.info(f"User created successfully with ID: {user.id}")
        return user

    def create_users(self, users: List[User]) -> List[User]:
        """
        Create several users at once.

        Returns:
            The created entities with their assigned ids
        """
        logger.info(f"Creating {len(users) if users else 0} users")
        created = self._create_many_use_case.execute(users)
        logger.info(f"Successfully created {len(created)} users")
        return created

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """
        Get a user by ID.

        Args:
            user_id: User identifier

        Returns:
            User entity if found, None otherwise
        """
        if not user_id or not user_id.strip():
            raise UserValidationError("User ID cannot be empty")
        logger.debug(f"Getting user by ID: {user_id}")
        return self._repository.find_by_id(user_id.strip())

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by exact email."""
        if not email or not email.strip():
            raise UserValidationError("Email cannot be empty")
        logger.debug(f"Getting user by email: {email}")
        return self._repository.find_by_email(email.strip())

    def get_all_users(self) -> List[User]:
        users = self._repository.find_all()
        logger.info(f"Retrieved {len(users)} users")
        return users

    def get_users_by_age_range(self, min_age: int, max_age: int) -> List[User]:
        """
        Get users whose age lies within [min_age, max_age].

        Raises:
            UserValidationError: If a bound is negative, min_age > max_age
                or max_age is over the age ceiling
        """
        validate_age_range(min_age, max_age, upper_limit=AGE_MAX)
        users = self._repository.find_by_age_range(min_age, max_age)
        logger.info(f"Found {len(users)} users in age range {min_age}-{max_age}")
        return users

    def search_users_by_name(self, name_pattern: str) -> List[User]:
        """Case-insensitive name search. The pattern needs at least two characters."""
        if not name_pattern or not name_pattern.strip():
            raise UserValidationError("Name pattern cannot be empty")
        if len(name_pattern.strip()) < MIN_SEARCH_PATTERN_LENGTH:
            raise UserValidationError(
                f"Name pattern must be at least {MIN_SEARCH_PATTERN_LENGTH} characters long"
            )

        users = self._repository.find_by_name_containing(name_pattern.strip())
        logger.info(f"Found {len(users)} users matching name pattern: {name_pattern}")
        return users

    def get_user_statistics(self) -> UserStatistics:
        """
        Compute count and age figures from a single scan of all users.

        Returns:
            UserStatistics; all figures are zero when there are no users
        """
        ages = [user.age for user in self._repository.find_all()]
        stats = UserStatistics(total_users=len(ages))
        if ages:
            stats.average_age = sum(ages) / len(ages)
            stats.min_age = min(ages)
            stats.max_age = max(ages)

        logger.info(f"User statistics: {stats}")
        return stats

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_user(self, user_id: str, name: str, email: str, age: int) -> bool:
        """
        Update name, email and age of an existing user.

        Returns:
            True if the stored document changed
        """
        logger.info(f"Updating user: id={user_id}, name={name}, email={email}, age={age}")
        success = self._update_use_case.execute(user_id=user_id, name=name, email=email, age=age)
        if success:
            logger.info(f"User updated successfully: {user_id}")
        else:
            logger.warning(f"User update did not modify anything: {user_id}")
        return success

    def update_user_email(self, user_id: str, new_email: str) -> bool:
        """Update only the email of an existing user."""
        logger.info(f"Updating user email: id={user_id}, new_email={new_email}")
        success = self._update_email_use_case.execute(user_id=user_id, new_email=new_email)
        if success:
            logger.info(f"User email updated successfully: {user_id}")
        else:
            logger.warning(f"User email update did not modify anything: {user_id}")
        return success

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_user(self, user_id: str) -> bool:
        """
        Delete an existing user.

        Raises:
            UserNotFoundError: If no user has this id
        """
        logger.info(f"Deleting user: {user_id}")
        success = self._delete_use_case.execute(user_id)
        if success:
            logger.info(f"User deleted successfully: {user_id}")
        else:
            logger.warning(f"User deletion failed: {user_id}")
        return success

    def delete_users_by_age_range(self, min_age: int, max_age: int, confirm: bool = False) -> int:
        """
        Delete every user within [min_age, max_age].

        Args:
            min_age: Lower bound, inclusive
            max_age: Upper bound, inclusive
            confirm: Must be True, otherwise nothing is deleted

        Returns:
            Number of deleted users
        """
        logger.info(f"Deleting users by age range: {min_age}-{max_age}, confirmed={confirm}")
        deleted = self._delete_by_age_use_case.execute(min_age, max_age, confirm)
        logger.info(f"Deleted {deleted} users in age range {min_age}-{max_age}")
        return deleted

    # ------------------------------------------------------------------
    # Existence checks
    # ------------------------------------------------------------------

    def user_exists(self, user_id: str) -> bool:
        if not user_id or not user_id.strip():
            return False
        return self._repository.exists_by_id(user_id.strip())

    def email_exists(self, email: str) -> bool:
        if not email or not email.strip():
            return False
        return self._repository.exists_by_email(email.strip())
