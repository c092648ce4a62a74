"""
User DTO
========

Pydantic models for user API requests and responses.
Business validation happens in the service, so request models only fix
the shape of the payload.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from firestore_users.domain.models.user import User


class UserCreateRequest(BaseModel):
    """DTO for creating a user."""
    name: str = Field(..., description="Letters, spaces, hyphens and apostrophes; 2-100 characters")
    email: str = Field(..., description="Email address, unique across users")
    age: int = Field(..., description="Age in years, 0-150")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "email": "john.doe@example.com",
                "age": 30,
            }
        }
    )

    def to_entity(self) -> User:
        return User(name=self.name, email=self.email, age=self.age)


class UserBatchCreateRequest(BaseModel):
    """DTO for creating several users with one bulk insert."""
    users: List[UserCreateRequest] = Field(..., description="Users to create")


class UserUpdateRequest(BaseModel):
    """DTO for overwriting name, email and age."""
    name: str
    email: str
    age: int


class UserEmailUpdateRequest(BaseModel):
    """DTO for changing only the email."""
    email: str


class UserResponse(BaseModel):
    """DTO for user data."""
    id: str
    name: str
    email: str
    age: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "6928422b8c9933d948cfdc21",
                "name": "John Doe",
                "email": "john.doe@example.com",
                "age": 30,
                "created_at": "2025-12-20T09:11:50.840Z",
                "updated_at": "2025-12-20T09:11:50.840Z",
            }
        }
    )

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserUpdateResponse(BaseModel):
    """DTO for update results."""
    user_id: str
    updated: bool


class UserDeleteResponse(BaseModel):
    """DTO for user deletion."""
    status: str
    user_id: str
    message: str


class UserBulkDeleteResponse(BaseModel):
    """DTO for deletion by age range."""
    min_age: int
    max_age: int
    deleted_count: int


class ExistsResponse(BaseModel):
    exists: bool


class UserStatisticsResponse(BaseModel):
    """DTO for aggregate user figures."""
    total_users: int
    average_age: float
    min_age: int
    max_age: int
