"""
Update User Use Cases
=====================

Business use cases for changing an existing user.
"""
from firestore_users.domain.exceptions import DuplicateEmailError, UserNotFoundError, UserValidationError
from firestore_users.domain.models.user import User
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.domain.validation import validate_email, validate_user_fields


def _require_id(user_id: str) -> str:
    if not user_id or not user_id.strip():
        raise UserValidationError("User ID cannot be empty")
    return user_id.strip()


def _ensure_email_available(repository: UserRepository, email: str, user_id: str) -> None:
    """Reject the email if a different user owns it. Owning it yourself is fine."""
    owner = repository.find_by_email(email)
    # stored ids are lowercase hex, callers may pass either case
    if owner is not None and (owner.id or "").lower() != user_id.lower():
        raise DuplicateEmailError(email)


class UpdateUserUseCase:
    """
    Use case for overwriting name, email and age of a user.

    Order: validate input, require the user to exist, check the email is
    not owned by someone else, then write.
    """

    def __init__(self, user_repository: UserRepository):
        """
        Initialize use case with repository.

        Args:
            user_repository: Repository for user persistence
        """
        self._repository = user_repository

    def execute(self, user_id: str, name: str, email: str, age: int) -> bool:
        """
        Execute the update user use case.

        Returns:
            True if the stored document was modified

        Raises:
            UserValidationError: If input validation fails
            UserNotFoundError: If no user has this id
            DuplicateEmailError: If another user owns the email
        """
        user_id = _require_id(user_id)
        name, email, age = validate_user_fields(name, email, age)

        if self._repository.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)
        _ensure_email_available(self._repository, email, user_id)

        return self._repository.update_user(user_id, User(name=name, email=email, age=age))


class UpdateUserEmailUseCase:
    """Use case for changing only the email of a user."""

    def __init__(self, user_repository: UserRepository):
        self._repository = user_repository

    def execute(self, user_id: str, new_email: str) -> bool:
        user_id = _require_id(user_id)
        new_email = validate_email(new_email)

        if not self._repository.exists_by_id(user_id):
            raise UserNotFoundError(user_id)
        _ensure_email_available(self._repository, new_email, user_id)

        return self._repository.update_email(user_id, new_email)
