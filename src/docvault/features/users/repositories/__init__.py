"""User repository implementations."""

from .user_repository import AsyncPGUserRepository
from .memory_user_repository import InMemoryUserRepository

__all__ = ["AsyncPGUserRepository", "InMemoryUserRepository"]
