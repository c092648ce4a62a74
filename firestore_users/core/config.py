# Standard library imports
import os
from typing import Final, Mapping, Optional
from dotenv import load_dotenv


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or malformed."""


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    Connection settings are validated when the Firestore connection is built,
    not here, so timestamps and logging work without a database configured.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        if environ is None:
            # Load environment variables from .env file
            load_dotenv()
            environ = os.environ
        self._environ: Mapping[str, str] = dict(environ)

        # Timezone Configuration
        # Default to UTC, but can be set via TIMEZONE env var (e.g., "UTC", "America/New_York")
        self.timezone: Final[str] = self.get("TIMEZONE", "UTC")
        self.log_level: Final[str] = self.get("LOG_LEVEL", "INFO").upper()

        # Firestore (MongoDB compatibility) Configuration
        self.project_id: Final[Optional[str]] = self.get("GOOGLE_CLOUD_PROJECT_ID")
        self.database_uid: Final[Optional[str]] = self.get("FIRESTORE_DATABASE_UID")
        self.database_location: Final[Optional[str]] = self.get("FIRESTORE_DATABASE_LOCATION")
        self.database_name: Final[str] = self.get("FIRESTORE_DATABASE_NAME", "default-database")

        # Collection Names
        self.users_collection: Final[str] = self.get("USERS_COLLECTION", "users")

        # Connection Pool / Timeout Configuration
        self.pool_max_size: Final[int] = self._get_int("MONGO_POOL_MAX_SIZE", 100)
        self.pool_min_size: Final[int] = self._get_int("MONGO_POOL_MIN_SIZE", 5)
        self.max_idle_time_ms: Final[int] = self._get_int("MONGO_MAX_IDLE_TIME_MS", 30000)
        self.connect_timeout_ms: Final[int] = self._get_int("MONGO_CONNECT_TIMEOUT_MS", 30000)
        self.socket_timeout_ms: Final[int] = self._get_int("MONGO_SOCKET_TIMEOUT_MS", 30000)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a raw configuration value, treating blank values as unset."""
        value = self._environ.get(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def _get_int(self, key: str, default: int) -> int:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from None
        if value < 0:
            raise ConfigurationError(f"{key} cannot be negative, got {value}")
        return value


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call reloads them."""
    global _settings
    _settings = None
