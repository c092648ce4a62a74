"""
Application Layer
=================

Application services and use cases.
This layer orchestrates domain entities and repositories.

Contains:
- Use Cases: Business operations (create user, update email, delete user, etc.)
- Services: Application services that coordinate multiple use cases
- DTOs: Pydantic models for the HTTP layer
"""
