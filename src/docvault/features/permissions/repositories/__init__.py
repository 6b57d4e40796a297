"""Permission repository implementations."""

from .permission_repository import AsyncPGPermissionRepository
from .memory_permission_repository import InMemoryPermissionRepository

__all__ = ["AsyncPGPermissionRepository", "InMemoryPermissionRepository"]
