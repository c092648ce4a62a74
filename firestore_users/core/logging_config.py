"""
Logging Configuration
=====================

Root logger setup shared by the API application and the scripts.
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a basic root handler.

    Unknown level names fall back to INFO.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # pymongo is chatty at DEBUG (heartbeats, pool events)
    logging.getLogger("pymongo").setLevel(max(numeric_level, logging.INFO))
