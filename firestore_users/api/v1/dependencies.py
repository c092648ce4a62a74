"""
Dependency Container
====================

FastAPI dependency functions backed by the DI container.
"""
from firestore_users.application.services.user_service import UserService
from firestore_users.di.container import get_container
from firestore_users.infrastructure.db.firestore_connection import FirestoreConnection


def get_user_service() -> UserService:
    """
    Get user service instance (singleton).

    Returns:
        UserService instance
    """
    return get_container().get(UserService)


def get_firestore_connection() -> FirestoreConnection:
    """Get the shared Firestore connection."""
    return get_container().connection
