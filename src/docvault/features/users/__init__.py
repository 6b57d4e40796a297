"""Users feature for docvault.

- entities/: User, UserRole and the UserRepository protocol
- repositories/: asyncpg and in-memory implementations
"""

from .entities import User, UserRole, UserRepository
from .repositories import AsyncPGUserRepository, InMemoryUserRepository

__all__ = [
    "User",
    "UserRole",
    "UserRepository",
    "AsyncPGUserRepository",
    "InMemoryUserRepository",
]
