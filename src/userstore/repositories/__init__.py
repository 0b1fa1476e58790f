"""
Repository layer initialization module.

The repository pattern keeps business logic away from the SQL backend: callers
use UserRepository, which talks to storage only through an SQLExecutor.

Usage:
    from userstore.repositories import UserRepository
"""

from .user_repository import UserRepository

__all__ = [
    "UserRepository",
]
