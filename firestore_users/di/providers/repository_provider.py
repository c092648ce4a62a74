from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.user_repository import UserRepository
from ...infrastructure.db.mongo_user_repository import MongoUserRepository
from .database_provider import DatabaseProvider

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets the connection from the database provider and creates repository instances.
        """
        connection = container.get(DatabaseProvider.CONNECTION_KEY)
        settings = container.get(Settings)

        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(
            UserRepository,
            MongoUserRepository(connection, collection_name=settings.users_collection)
        )
