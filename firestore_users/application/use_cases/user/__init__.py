from .create_user import CreateUserUseCase, CreateUsersUseCase
from .update_user import UpdateUserUseCase, UpdateUserEmailUseCase
from .delete_user import DeleteUserUseCase, DeleteUsersByAgeRangeUseCase

__all__ = [
    "CreateUserUseCase",
    "CreateUsersUseCase",
    "UpdateUserUseCase",
    "UpdateUserEmailUseCase",
    "DeleteUserUseCase",
    "DeleteUsersByAgeRangeUseCase",
]
