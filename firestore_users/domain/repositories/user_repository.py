"""
User Repository Interface
=========================

Abstract interface for user data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from firestore_users.domain.models.user import User


class UserRepository(ABC):
    """
    Abstract repository for user persistence operations.

    Lookups that find nothing (including malformed identifiers) return None,
    an empty list or False. Store failures raise UserStoreError.
    """

    @abstractmethod
    def create(self, user: User) -> User:
        """
        Insert a single user.

        Args:
            user: User entity to insert

        Returns:
            The same entity with its store-assigned id

        Raises:
            UserValidationError: If user is None or invalid
        """
        pass

    @abstractmethod
    def create_many(self, users: List[User]) -> List[User]:
        """
        Insert several users with one bulk call.

        Every user is validated before anything is written.
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find a user by its ID.

        Args:
            user_id: Hex string identifier

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by exact email match."""
        pass

    @abstractmethod
    def find_all(self) -> List[User]:
        """Return every user. Order is not guaranteed."""
        pass

    @abstractmethod
    def find_by_age_range(self, min_age: int, max_age: int) -> List[User]:
        """
        Find users whose age lies within [min_age, max_age].

        Raises:
            UserValidationError: If a bound is negative or min_age > max_age
        """
        pass

    @abstractmethod
    def find_by_name_containing(self, pattern: str) -> List[User]:
        """Find users whose name contains pattern, ignoring case."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Count all users."""
        pass

    @abstractmethod
    def update_user(self, user_id: str, data: User) -> bool:
        """
        Overwrite name, email and age of a user.

        Args:
            user_id: Identifier of the user to update
            data: Entity carrying the new values

        Returns:
            True if exactly one document was modified
        """
        pass

    @abstractmethod
    def update_email(self, user_id: str, email: str) -> bool:
        """Overwrite only the email of a user."""
        pass

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """
        Delete a user.

        Returns:
            True if a document was removed, False otherwise
        """
        pass

    @abstractmethod
    def delete_by_age_range(self, min_age: int, max_age: int) -> int:
        """Delete every user within [min_age, max_age] and return the count."""
        pass

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every user and return the count."""
        pass

    @abstractmethod
    def exists_by_id(self, user_id: str) -> bool:
        """Check if a user with this ID exists."""
        pass

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Check if a user with this email exists."""
        pass
