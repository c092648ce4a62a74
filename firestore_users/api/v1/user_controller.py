"""
User Controller
===============

FastAPI controller for user management endpoints.
"""
import logging
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, status

from firestore_users.api.v1.dependencies import get_user_service
from firestore_users.application.dto.user_dto import (
    ExistsResponse,
    UserBatchCreateRequest,
    UserBulkDeleteResponse,
    UserCreateRequest,
    UserDeleteResponse,
    UserEmailUpdateRequest,
    UserResponse,
    UserStatisticsResponse,
    UserUpdateRequest,
    UserUpdateResponse,
)
from firestore_users.application.services.user_service import UserService
from firestore_users.domain.exceptions import (
    DuplicateEmailError,
    UserError,
    UserNotFoundError,
    UserStoreError,
    UserValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


def _raise_http_error(error: UserError) -> NoReturn:
    """Map a domain error to the matching HTTP status."""
    if isinstance(error, UserNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, DuplicateEmailError):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(error, UserValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, UserStoreError):
        logger.error(f"Store failure: {error}", exc_info=True)
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    raise HTTPException(status_code=status_code, detail=str(error)) from error


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Create a user after validating fields and checking the email is not taken.",
)
async def create_user(
    request: UserCreateRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user."""
    try:
        user = service.create_user(name=request.name, email=request.email, age=request.age)
    except UserError as e:
        _raise_http_error(e)
    return UserResponse.from_entity(user)


@router.post(
    "/batch",
    response_model=List[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create several users",
    description="""
    Create several users with one bulk insert.

    Every user is validated and every email checked before anything is written.
    """,
)
async def create_users(
    request: UserBatchCreateRequest,
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    """Create a batch of users."""
    try:
        users = service.create_users([item.to_entity() for item in request.users])
    except UserError as e:
        _raise_http_error(e)
    return [UserResponse.from_entity(user) for user in users]


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
)
async def list_users(
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    """List every user."""
    try:
        users = service.get_all_users()
    except UserError as e:
        _raise_http_error(e)
    return [UserResponse.from_entity(user) for user in users]


@router.get(
    "/search",
    response_model=List[UserResponse],
    summary="Search users by name",
    description="Case-insensitive substring search on the user name.",
)
async def search_users(
    name: str = Query(..., description="Part of the name, at least 2 characters"),
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    try:
        users = service.search_users_by_name(name)
    except UserError as e:
        _raise_http_error(e)
    return [UserResponse.from_entity(user) for user in users]


@router.get(
    "/age-range",
    response_model=List[UserResponse],
    summary="Find users by age range",
    description="Both bounds are inclusive.",
)
async def get_users_by_age_range(
    min_age: int,
    max_age: int,
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    try:
        users = service.get_users_by_age_range(min_age, max_age)
    except UserError as e:
        _raise_http_error(e)
    return [UserResponse.from_entity(user) for user in users]


@router.get(
    "/statistics",
    response_model=UserStatisticsResponse,
    summary="User statistics",
)
async def get_user_statistics(
    service: UserService = Depends(get_user_service),
) -> UserStatisticsResponse:
    """Get count and age figures."""
    try:
        stats = service.get_user_statistics()
    except UserError as e:
        _raise_http_error(e)
    return UserStatisticsResponse(
        total_users=stats.total_users,
        average_age=stats.average_age,
        min_age=stats.min_age,
        max_age=stats.max_age,
    )


@router.get(
    "/by-email",
    response_model=UserResponse,
    summary="Get user by email",
)
async def get_user_by_email(
    email: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = service.get_user_by_email(email)
    except UserError as e:
        _raise_http_error(e)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with email '{email}' not found"
        )
    return UserResponse.from_entity(user)


@router.get(
    "/email-exists",
    response_model=ExistsResponse,
    summary="Check whether an email is taken",
)
async def email_exists(
    email: str,
    service: UserService = Depends(get_user_service),
) -> ExistsResponse:
    try:
        return ExistsResponse(exists=service.email_exists(email))
    except UserError as e:
        _raise_http_error(e)


@router.delete(
    "/age-range",
    response_model=UserBulkDeleteResponse,
    summary="Delete users by age range",
    description="""
    Delete every user whose age lies within the inclusive range.

    The request must carry confirm=true; the deletion cannot be undone.
    """,
)
async def delete_users_by_age_range(
    min_age: int,
    max_age: int,
    confirm: bool = False,
    service: UserService = Depends(get_user_service),
) -> UserBulkDeleteResponse:
    try:
        deleted = service.delete_users_by_age_range(min_age, max_age, confirm=confirm)
    except UserError as e:
        _raise_http_error(e)
    return UserBulkDeleteResponse(min_age=min_age, max_age=max_age, deleted_count=deleted)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a specific user by ID."""
    try:
        user = service.get_user_by_id(user_id)
    except UserError as e:
        _raise_http_error(e)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' not found"
        )
    return UserResponse.from_entity(user)


@router.get(
    "/{user_id}/exists",
    response_model=ExistsResponse,
    summary="Check whether a user exists",
)
async def user_exists(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> ExistsResponse:
    try:
        return ExistsResponse(exists=service.user_exists(user_id))
    except UserError as e:
        _raise_http_error(e)


@router.put(
    "/{user_id}",
    response_model=UserUpdateResponse,
    summary="Update a user",
    description="Overwrite name, email and age. The email may stay the same.",
)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    service: UserService = Depends(get_user_service),
) -> UserUpdateResponse:
    try:
        updated = service.update_user(user_id, name=request.name, email=request.email, age=request.age)
    except UserError as e:
        _raise_http_error(e)
    return UserUpdateResponse(user_id=user_id, updated=updated)


@router.patch(
    "/{user_id}/email",
    response_model=UserUpdateResponse,
    summary="Update a user's email",
)
async def update_user_email(
    user_id: str,
    request: UserEmailUpdateRequest,
    service: UserService = Depends(get_user_service),
) -> UserUpdateResponse:
    try:
        updated = service.update_user_email(user_id, request.email)
    except UserError as e:
        _raise_http_error(e)
    return UserUpdateResponse(user_id=user_id, updated=updated)


@router.delete(
    "/{user_id}",
    response_model=UserDeleteResponse,
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserDeleteResponse:
    """Delete a user."""
    try:
        deleted = service.delete_user(user_id)
    except UserError as e:
        _raise_http_error(e)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' not found"
        )
    return UserDeleteResponse(
        status="deleted",
        user_id=user_id,
        message=f"User '{user_id}' has been deleted",
    )
