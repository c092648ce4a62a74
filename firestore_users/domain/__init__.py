"""
Domain Layer
============

Core business logic and domain models.
This layer has no dependencies on external frameworks or infrastructure.

Contains:
- Models: the User entity and its validation rules
- Repository Interfaces: Abstract contracts for data access
- Exceptions: typed errors shared by every layer
"""
