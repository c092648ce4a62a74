"""Pytest configuration and fixtures."""
from __future__ import annotations

import re
from typing import Dict, List, Optional

import pytest
from bson import ObjectId

from firestore_users.application.services.user_service import UserService
from firestore_users.core import config
from firestore_users.core.config import Settings
from firestore_users.domain.exceptions import UserValidationError
from firestore_users.domain.models.user import User
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.domain.validation import validate_age_range, validate_email

VALID_ENV = {
    "GOOGLE_CLOUD_PROJECT_ID": "demo-project",
    "FIRESTORE_DATABASE_UID": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
    "FIRESTORE_DATABASE_LOCATION": "nam5",
    "FIRESTORE_DATABASE_NAME": "users-db",
}


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository with the same contract as MongoUserRepository."""

    def __init__(self) -> None:
        self.documents: Dict[str, User] = {}
        self.write_calls = 0

    def _copy(self, user: User) -> User:
        return User(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def create(self, user: User) -> User:
        if user is None or not user.is_valid():
            raise UserValidationError("User data is not valid")
        self.write_calls += 1
        user.touch()
        user.id = str(ObjectId())
        self.documents[user.id] = self._copy(user)
        return user

    def create_many(self, users: List[User]) -> List[User]:
        if not users or any(user is None or not user.is_valid() for user in users):
            raise UserValidationError("Invalid user data")
        self.write_calls += 1
        for user in users:
            user.touch()
            user.id = str(ObjectId())
            self.documents[user.id] = self._copy(user)
        return users

    def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.documents.get(user_id)
        return self._copy(user) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        for user in self.documents.values():
            if user.email == email:
                return self._copy(user)
        return None

    def find_all(self) -> List[User]:
        return [self._copy(user) for user in self.documents.values()]

    def find_by_age_range(self, min_age: int, max_age: int) -> List[User]:
        validate_age_range(min_age, max_age)
        return [self._copy(u) for u in self.documents.values() if min_age <= u.age <= max_age]

    def find_by_name_containing(self, pattern: str) -> List[User]:
        if not pattern:
            return []
        regex = re.compile(re.escape(pattern), re.IGNORECASE)
        return [self._copy(u) for u in self.documents.values() if regex.search(u.name)]

    def count(self) -> int:
        return len(self.documents)

    def update_user(self, user_id: str, data: User) -> bool:
        if data is None or not data.is_valid():
            raise UserValidationError("Updated user data is not valid")
        stored = self.documents.get(user_id)
        if stored is None:
            return False
        self.write_calls += 1
        stored.name, stored.email, stored.age = data.name, data.email, data.age
        stored.touch()
        return True

    def update_email(self, user_id: str, email: str) -> bool:
        email = validate_email(email)
        stored = self.documents.get(user_id)
        if stored is None:
            return False
        self.write_calls += 1
        stored.update_email(email)
        return True

    def delete(self, user_id: str) -> bool:
        if user_id not in self.documents:
            return False
        self.write_calls += 1
        del self.documents[user_id]
        return True

    def delete_by_age_range(self, min_age: int, max_age: int) -> int:
        validate_age_range(min_age, max_age)
        doomed = [uid for uid, u in self.documents.items() if min_age <= u.age <= max_age]
        if doomed:
            self.write_calls += 1
        for uid in doomed:
            del self.documents[uid]
        return len(doomed)

    def delete_all(self) -> int:
        count = len(self.documents)
        self.documents.clear()
        return count

    def exists_by_id(self, user_id: str) -> bool:
        return user_id in self.documents

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Pin process settings so a developer's .env never leaks into tests."""
    settings = Settings(environ={"TIMEZONE": "UTC"})
    monkeypatch.setattr(config, "_settings", settings)
    return settings


@pytest.fixture()
def valid_settings() -> Settings:
    return Settings(environ=VALID_ENV)


@pytest.fixture()
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def service(repository: InMemoryUserRepository) -> UserService:
    return UserService(user_repository=repository)
