"""
FastAPI Application
===================

Main FastAPI app setup with all routes.
Startup builds the DI container (one Firestore connection per process);
shutdown releases it.
"""
import logging

from fastapi import Depends, FastAPI

from firestore_users.api.v1 import user_router
from firestore_users.api.v1.dependencies import get_firestore_connection
from firestore_users.core.config import get_settings
from firestore_users.core.logging_config import configure_logging
from firestore_users.di.container import get_container, shutdown_container
from firestore_users.infrastructure.db.firestore_connection import FirestoreConnection

logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Logging configuration
    - API route registration
    - Startup/shutdown event handlers for the Firestore connection

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(get_settings().log_level)

    application = FastAPI(
        title="Firestore Users API",
        description="User CRUD over Firestore's MongoDB-compatible API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.include_router(user_router, prefix="/api/v1/users")

    @application.on_event("startup")
    async def startup_event():
        """Connect to Firestore and report whether it answers."""
        container = get_container()
        if container.connection.test_connection():
            logger.info("Successfully connected to Firestore")
        else:
            logger.warning("Firestore did not answer the startup ping")

    @application.on_event("shutdown")
    async def shutdown_event():
        """Close the Firestore connection."""
        shutdown_container()
        logger.info("All services stopped")

    @application.get("/")
    async def root():
        """Root endpoint."""
        return {
            "status": "running",
            "service": "Firestore Users API",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @application.get("/health")
    async def health(connection: FirestoreConnection = Depends(get_firestore_connection)):
        """Health check endpoint backed by a database ping."""
        healthy = connection.test_connection()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "database": "connected" if healthy else "unreachable",
        }

    return application


# Create application instance
app = create_application()
