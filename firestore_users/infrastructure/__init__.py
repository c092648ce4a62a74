"""
Infrastructure Layer
====================

Firestore connection and pymongo repository implementations.
"""
