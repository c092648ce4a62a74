from typing import TYPE_CHECKING
from ...core.config import Settings
from ...infrastructure.db.firestore_connection import FirestoreConnection

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    CONNECTION_KEY = "firestore_connection"

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the Firestore connection in the container.
        This is the ONLY place where a connection is created; repositories
        receive it from the container.
        """
        settings = container.get(Settings)
        container.register_singleton(DatabaseProvider.CONNECTION_KEY, FirestoreConnection(settings))
