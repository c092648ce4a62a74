"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the entire application.
All datetime operations use the timezone configured in core.config.

Functions:
- now(): Returns timezone-aware datetime object
"""
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone, tzinfo

from firestore_users.core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().timezone

    # Handle UTC explicitly
    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def now() -> datetime:
    """
    Get current datetime with application-configured timezone.

    Returns:
        timezone-aware datetime object
    """
    return datetime.now(_get_app_timezone())

