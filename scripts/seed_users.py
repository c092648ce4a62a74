"""
Seed users script
-----------------

Purpose:
- Check the Firestore connection and insert a few sample users through the
  service layer, so the API has data to show.

What it does:
- Pings the database and stops if it does not answer.
- Creates the sample users whose email is not taken yet (one bulk insert).
- Logs the resulting user statistics.

How to use:
1) Ensure env vars: GOOGLE_CLOUD_PROJECT_ID, FIRESTORE_DATABASE_UID,
   FIRESTORE_DATABASE_LOCATION (see .env.example)
2) Run:
   python -m scripts.seed_users
"""
import logging
import sys
from typing import List

from firestore_users.application.services.user_service import UserService
from firestore_users.core.config import get_settings
from firestore_users.core.logging_config import configure_logging
from firestore_users.di.container import get_container, shutdown_container
from firestore_users.domain.models.user import User

logger = logging.getLogger("seed_users")

SAMPLE_USERS = [
    ("John Doe", "john.doe@example.com", 30),
    ("Jane Smith", "jane.smith@example.com", 25),
    ("Bob Johnson", "bob.johnson@example.com", 35),
    ("Alice Brown", "alice.brown@example.com", 28),
    ("Charlie Wilson", "charlie.wilson@example.com", 42),
    ("Mary O'Neil", "mary.oneil@example.com", 51),
]


def main() -> int:
    configure_logging(get_settings().log_level)
    container = get_container()
    try:
        if not container.connection.test_connection():
            logger.error("Firestore is not reachable, nothing seeded")
            return 1

        service = container.get(UserService)
        to_create: List[User] = [
            User(name=name, email=email, age=age)
            for name, email, age in SAMPLE_USERS
            if not service.email_exists(email)
        ]
        if to_create:
            created = service.create_users(to_create)
            for user in created:
                logger.info(f"Inserted {user.name} <{user.email}> with ID {user.id}")
        else:
            logger.info("All sample users already exist")

        logger.info(f"{service.get_user_statistics()}")
        return 0
    finally:
        shutdown_container()


if __name__ == "__main__":
    sys.exit(main())
