"""Permissions feature for docvault.

Feature-First architecture for document-level access control:
- entities/: PermissionType hierarchy, DocumentPermission and protocols
- services/: access evaluator and grant management
- repositories/: asyncpg and in-memory grant storage
"""

from .entities import PermissionType, PERMISSION_HIERARCHY, DocumentPermission, PermissionRepository
from .exceptions import InsufficientPermissionError, CannotRevokeOwnerPermissionError
from .services import (
    evaluate_access,
    get_highest_permission,
    require_permission,
    require_read_permission,
    require_write_permission,
    require_delete_permission,
    require_permission_manager,
    filter_accessible_documents,
    is_admin,
    is_document_owner,
    PermissionService,
    PermissionCheck,
    GrantPermissionCommand,
    UpdatePermissionCommand,
    RevokePermissionCommand,
)
from .repositories import AsyncPGPermissionRepository, InMemoryPermissionRepository

__all__ = [
    # Entities
    "PermissionType",
    "PERMISSION_HIERARCHY",
    "DocumentPermission",

    # Protocols
    "PermissionRepository",

    # Exceptions
    "InsufficientPermissionError",
    "CannotRevokeOwnerPermissionError",

    # Evaluator
    "evaluate_access",
    "get_highest_permission",
    "require_permission",
    "require_read_permission",
    "require_write_permission",
    "require_delete_permission",
    "require_permission_manager",
    "filter_accessible_documents",
    "is_admin",
    "is_document_owner",

    # Services
    "PermissionService",
    "PermissionCheck",
    "GrantPermissionCommand",
    "UpdatePermissionCommand",
    "RevokePermissionCommand",

    # Repository Implementations
    "AsyncPGPermissionRepository",
    "InMemoryPermissionRepository",
]
