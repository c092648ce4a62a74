# Standard library imports
import logging
from typing import Optional

# Local application imports
from ..core.config import Settings, get_settings
from ..infrastructure.db.firestore_connection import FirestoreConnection
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    UserProvider,
)

logger = logging.getLogger(__name__)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Settings
    2. Database connection (DatabaseProvider)
    3. Repositories (RepositoryProvider) - depends on database
    4. Services (UserProvider) - depend on repositories
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.register_singleton(Settings, settings or get_settings())
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → services
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        UserProvider.register(self)

    @property
    def connection(self) -> FirestoreConnection:
        return self.get(DatabaseProvider.CONNECTION_KEY)

    def shutdown(self) -> None:
        """Close the connection and drop every registration."""
        connection = self.instances.get(DatabaseProvider.CONNECTION_KEY)
        if connection is not None:
            connection.close()
        self.instances.clear()


# Global container instance (one live connection per process)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance, building it on first use

    Returns:
        DIContainer instance with all dependencies registered

    Raises:
        ConfigurationError: If the connection settings are missing or malformed
    """
    global _container
    if _container is None:
        _container = DIContainer()
        logger.info("DI container initialized")
    return _container


def shutdown_container() -> None:
    """Release the connection. The next get_container() call reconnects."""
    global _container
    if _container is not None:
        _container.shutdown()
        _container = None
        logger.info("DI container shut down")
