"""User management over Firestore's MongoDB-compatible API."""

__version__ = "1.0.0"
