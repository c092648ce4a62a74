"""
Delete User Use Cases
=====================

Business use cases for removing users.
"""
import logging

from firestore_users.domain.exceptions import UserNotFoundError, UserValidationError
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.domain.validation import validate_age_range

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Use case for deleting one user that must exist."""

    def __init__(self, user_repository: UserRepository):
        """
        Initialize use case with repository.

        Args:
            user_repository: Repository for user persistence
        """
        self._repository = user_repository

    def execute(self, user_id: str) -> bool:
        """
        Execute the delete user use case.

        Returns:
            True if the document was removed

        Raises:
            UserValidationError: If the id is empty
            UserNotFoundError: If no user has this id
        """
        if not user_id or not user_id.strip():
            raise UserValidationError("User ID cannot be empty")
        user_id = user_id.strip()

        if not self._repository.exists_by_id(user_id):
            raise UserNotFoundError(user_id)

        return self._repository.delete(user_id)


class DeleteUsersByAgeRangeUseCase:
    """
    Use case for bulk deletion by age.

    The caller must pass confirm=True; the deletion cannot be undone.
    """

    def __init__(self, user_repository: UserRepository):
        self._repository = user_repository

    def execute(self, min_age: int, max_age: int, confirm: bool) -> int:
        if confirm is not True:
            raise UserValidationError("Deletion not confirmed. This operation is irreversible.")
        validate_age_range(min_age, max_age)

        affected = self._repository.find_by_age_range(min_age, max_age)
        logger.warning(f"About to delete {len(affected)} users in age range {min_age}-{max_age}")

        return self._repository.delete_by_age_range(min_age, max_age)
