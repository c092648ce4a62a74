"""
Firestore Connection
====================

MongoDB client for Firestore's MongoDB-compatible API.

The connection authenticates with MONGODB-OIDC using the ambient Google
Cloud credentials of the VM, so no secret is part of the configuration.
One instance is created by the DI container and shared by the repositories.
"""
import logging
import re
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from firestore_users.core.config import ConfigurationError, Settings

logger = logging.getLogger(__name__)

CONNECTION_STRING_TEMPLATE = (
    "mongodb://{uid}.{location}.firestore.goog:443/{database}"
    "?loadBalanced=true&tls=true&retryWrites=false"
    "&authMechanism=MONGODB-OIDC"
    "&authMechanismProperties=ENVIRONMENT:gcp,TOKEN_RESOURCE:FIRESTORE"
)

# Host labels and database names end up inside the URI
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")


def build_connection_string(settings: Settings) -> str:
    """
    Build the Firestore connection string from settings.

    Raises:
        ConfigurationError: If project id, database uid or location is
            missing, or any identifier contains characters a URI host
            label cannot carry
    """
    if not settings.project_id:
        raise ConfigurationError("GOOGLE_CLOUD_PROJECT_ID must be set")
    if not settings.database_uid or not settings.database_location:
        raise ConfigurationError(
            "Both FIRESTORE_DATABASE_UID and FIRESTORE_DATABASE_LOCATION must be set"
        )

    for key, value in (
        ("FIRESTORE_DATABASE_UID", settings.database_uid),
        ("FIRESTORE_DATABASE_LOCATION", settings.database_location),
        ("FIRESTORE_DATABASE_NAME", settings.database_name),
    ):
        if not _IDENTIFIER_PATTERN.fullmatch(value):
            raise ConfigurationError(f"{key} is malformed: '{value}'")

    connection_string = CONNECTION_STRING_TEMPLATE.format(
        uid=settings.database_uid,
        location=settings.database_location,
        database=settings.database_name,
    )
    logger.debug(
        f"Built connection string for {settings.database_uid[:8]}***.firestore.goog/"
        f"{settings.database_name} (project {settings.project_id})"
    )
    return connection_string


class FirestoreConnection:
    """
    Owns the MongoClient and the database handle.

    Pooling is handled by pymongo; this class only passes the configured
    bounds and timeouts through.
    """

    def __init__(self, settings: Settings):
        connection_string = build_connection_string(settings)

        try:
            self._client: Optional[MongoClient] = MongoClient(
                connection_string,
                maxPoolSize=settings.pool_max_size,
                minPoolSize=settings.pool_min_size,
                maxIdleTimeMS=settings.max_idle_time_ms,
                connectTimeoutMS=settings.connect_timeout_ms,
                socketTimeoutMS=settings.socket_timeout_ms,
                tz_aware=True,
            )
        except (PyMongoError, ValueError, TypeError) as e:
            # pymongo rejects bad option values such as minPoolSize > maxPoolSize with ValueError
            raise ConfigurationError(f"Failed to create Firestore client: {e}") from e

        self._database: Optional[Database] = self._client[settings.database_name]
        logger.info(f"Firestore client created for database '{settings.database_name}'")

    @property
    def database(self) -> Database:
        """Get the database handle."""
        if self._database is None:
            raise RuntimeError("Firestore connection is closed")
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a collection from the configured database.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB Collection object
        """
        return self.database[collection_name]

    def test_connection(self) -> bool:
        """Ping the server. Returns False instead of raising on failure."""
        try:
            self.database.command("ping")
        except (PyMongoError, RuntimeError) as e:
            logger.error(f"Connection test failed: {e}")
            return False
        logger.info("Connection test successful")
        return True

    @property
    def is_closed(self) -> bool:
        return self._client is None

    def close(self) -> None:
        """Close the client and release pooled connections."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("Firestore client connection closed")
