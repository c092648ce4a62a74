"""
MongoDB User Repository
=======================

Concrete implementation of UserRepository using pymongo against
Firestore's MongoDB-compatible API.
"""
import logging
import re
from contextlib import contextmanager
from typing import Iterator, List, Optional

from bson import ObjectId
from pymongo.errors import BulkWriteError, PyMongoError

from firestore_users.domain.constants.user_fields import UserFields
from firestore_users.domain.exceptions import UserStoreError, UserValidationError
from firestore_users.domain.models.user import User
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.domain.validation import validate_age_range, validate_email
from firestore_users.infrastructure.db.firestore_connection import FirestoreConnection
from firestore_users.utils.datetime_utils import now

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures as UserStoreError."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"Failed to {action}: {e}")
        raise UserStoreError(f"Failed to {action}") from e


def _parse_object_id(user_id: Optional[str]) -> Optional[ObjectId]:
    """Return the ObjectId for a hex string, or None if it is malformed."""
    if not user_id or not ObjectId.is_valid(user_id.strip()):
        if user_id:
            logger.warning(f"Invalid ObjectId format: {user_id}")
        return None
    return ObjectId(user_id.strip())


def _age_filter(min_age: int, max_age: int) -> dict:
    return {UserFields.AGE: {"$gte": min_age, "$lte": max_age}}


class MongoUserRepository(UserRepository):
    """
    MongoDB implementation of UserRepository.

    Handles all user persistence operations using MongoDB.
    """

    DEFAULT_COLLECTION_NAME = "users"

    def __init__(self, connection: FirestoreConnection, collection_name: str = DEFAULT_COLLECTION_NAME):
        """
        Initialize repository with a Firestore connection.

        Args:
            connection: Shared connection created by the DI container
            collection_name: Collection holding user documents
        """
        self._collection = connection.get_collection(collection_name)
        logger.info(f"MongoUserRepository initialized with collection: {collection_name}")

    def _to_entity(self, doc: dict) -> User:
        """Convert MongoDB document to User entity."""
        return User(
            id=str(doc[UserFields.MONGO_ID]),
            name=doc.get(UserFields.NAME),
            email=doc.get(UserFields.EMAIL),
            age=doc.get(UserFields.AGE),
            created_at=doc.get(UserFields.CREATED_AT) or now(),
            updated_at=doc.get(UserFields.UPDATED_AT) or now(),
        )

    def _to_document(self, user: User) -> dict:
        """Convert User entity to MongoDB document. The _id is left to the store."""
        return {
            UserFields.NAME: user.name,
            UserFields.EMAIL: user.email,
            UserFields.AGE: user.age,
            UserFields.CREATED_AT: user.created_at,
            UserFields.UPDATED_AT: user.updated_at,
        }

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, user: User) -> User:
        """Insert a single user and assign its id."""
        if user is None:
            raise UserValidationError("User cannot be None")
        if not user.is_valid():
            raise UserValidationError(f"User data is not valid: {user}")

        user.touch()
        with _store_errors("create user"):
            result = self._collection.insert_one(self._to_document(user))

        if not result.acknowledged or result.inserted_id is None:
            raise UserStoreError("Failed to create user: insert was not acknowledged")

        user.id = str(result.inserted_id)
        logger.info(f"User created successfully with ID: {user.id}")
        return user

    def create_many(self, users: List[User]) -> List[User]:
        """
        Insert several users with one ordered bulk call.

        Nothing is written unless every user is valid. A store failure part
        way through stops the batch; documents written before the failure
        stay in place and the error reports how many there were.
        """
        if not users:
            raise UserValidationError("Users list cannot be empty")
        for user in users:
            if user is None or not user.is_valid():
                raise UserValidationError(f"Invalid user data: {user}")

        for user in users:
            user.touch()
        docs = [self._to_document(user) for user in users]

        try:
            result = self._collection.insert_many(docs, ordered=True)
        except BulkWriteError as e:
            inserted = e.details.get("nInserted", 0)
            logger.error(f"Bulk insert stopped after {inserted} of {len(users)} users: {e}")
            raise UserStoreError(
                f"Failed to create users: {inserted} of {len(users)} were written"
            ) from e
        except PyMongoError as e:
            logger.error(f"Failed to create users: {e}")
            raise UserStoreError("Failed to create users") from e

        if not result.acknowledged:
            raise UserStoreError("Failed to create users: insert was not acknowledged")

        for user, inserted_id in zip(users, result.inserted_ids):
            user.id = str(inserted_id)
        logger.info(f"Successfully created {len(result.inserted_ids)} users")
        return users

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find_by_id(self, user_id: str) -> Optional[User]:
        """Find a user by its ID."""
        object_id = _parse_object_id(user_id)
        if object_id is None:
            return None

        with _store_errors(f"find user by ID {user_id}"):
            doc = self._collection.find_one({UserFields.MONGO_ID: object_id})
        if not doc:
            logger.debug(f"No user found with ID: {user_id}")
            return None
        return self._to_entity(doc)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by exact email match."""
        if not email or not email.strip():
            return None

        with _store_errors(f"find user by email {email}"):
            doc = self._collection.find_one({UserFields.EMAIL: email})
        if not doc:
            logger.debug(f"No user found with email: {email}")
            return None
        return self._to_entity(doc)

    def find_all(self) -> List[User]:
        """Return every user."""
        with _store_errors("find all users"):
            users = [self._to_entity(doc) for doc in self._collection.find()]
        logger.debug(f"Found {len(users)} users")
        return users

    def find_by_age_range(self, min_age: int, max_age: int) -> List[User]:
        """Find users with min_age <= age <= max_age."""
        validate_age_range(min_age, max_age)

        with _store_errors(f"find users by age range {min_age}-{max_age}"):
            users = [self._to_entity(doc) for doc in self._collection.find(_age_filter(min_age, max_age))]
        logger.debug(f"Found {len(users)} users in age range {min_age}-{max_age}")
        return users

    def find_by_name_containing(self, pattern: str) -> List[User]:
        """Case-insensitive substring match on the name."""
        if not pattern or not pattern.strip():
            return []

        query = {UserFields.NAME: {"$regex": re.escape(pattern), "$options": "i"}}
        with _store_errors(f"find users by name pattern {pattern}"):
            users = [self._to_entity(doc) for doc in self._collection.find(query)]
        logger.debug(f"Found {len(users)} users with name containing: {pattern}")
        return users

    def count(self) -> int:
        """Count all users."""
        with _store_errors("count users"):
            return self._collection.count_documents({})

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_user(self, user_id: str, data: User) -> bool:
        """Overwrite name, email, age and updated_at of a user."""
        if data is None or not data.is_valid():
            raise UserValidationError("Updated user data is not valid")

        object_id = _parse_object_id(user_id)
        if object_id is None:
            return False

        data.touch()
        updates = {
            "$set": {
                UserFields.NAME: data.name,
                UserFields.EMAIL: data.email,
                UserFields.AGE: data.age,
                UserFields.UPDATED_AT: data.updated_at,
            }
        }
        with _store_errors(f"update user {user_id}"):
            result = self._collection.update_one({UserFields.MONGO_ID: object_id}, updates)

        success = result.acknowledged and result.modified_count == 1
        if success:
            logger.info(f"User updated successfully with ID: {user_id}")
        else:
            logger.warning(f"No user modified for ID: {user_id}")
        return success

    def update_email(self, user_id: str, email: str) -> bool:
        """Overwrite the email and updated_at of a user."""
        email = validate_email(email)

        object_id = _parse_object_id(user_id)
        if object_id is None:
            return False

        updates = {"$set": {UserFields.EMAIL: email, UserFields.UPDATED_AT: now()}}
        with _store_errors(f"update email of user {user_id}"):
            result = self._collection.update_one({UserFields.MONGO_ID: object_id}, updates)

        success = result.acknowledged and result.modified_count == 1
        if success:
            logger.info(f"User email updated successfully for ID: {user_id}")
        else:
            logger.warning(f"No user modified when updating email for ID: {user_id}")
        return success

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID."""
        object_id = _parse_object_id(user_id)
        if object_id is None:
            return False

        with _store_errors(f"delete user {user_id}"):
            result = self._collection.delete_one({UserFields.MONGO_ID: object_id})

        success = result.acknowledged and result.deleted_count > 0
        if success:
            logger.info(f"User deleted successfully with ID: {user_id}")
        else:
            logger.warning(f"No user found to delete with ID: {user_id}")
        return success

    def delete_by_age_range(self, min_age: int, max_age: int) -> int:
        """Delete every user within the inclusive age range."""
        validate_age_range(min_age, max_age)

        with _store_errors(f"delete users by age range {min_age}-{max_age}"):
            result = self._collection.delete_many(_age_filter(min_age, max_age))
        logger.info(f"Deleted {result.deleted_count} users in age range {min_age}-{max_age}")
        return result.deleted_count

    def delete_all(self) -> int:
        """Delete every user."""
        with _store_errors("delete all users"):
            result = self._collection.delete_many({})
        logger.warning(f"Deleted ALL {result.deleted_count} users from collection")
        return result.deleted_count

    # ------------------------------------------------------------------
    # Existence checks
    # ------------------------------------------------------------------

    def exists_by_id(self, user_id: str) -> bool:
        """Check if a user exists."""
        object_id = _parse_object_id(user_id)
        if object_id is None:
            return False

        with _store_errors(f"check existence of user {user_id}"):
            count = self._collection.count_documents({UserFields.MONGO_ID: object_id}, limit=1)
        return count > 0

    def exists_by_email(self, email: str) -> bool:
        """Check if an email is already taken."""
        if not email or not email.strip():
            return False

        with _store_errors(f"check existence of email {email}"):
            count = self._collection.count_documents({UserFields.EMAIL: email}, limit=1)
        return count > 0
