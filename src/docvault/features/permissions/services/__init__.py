"""Permission services: access evaluation and grant management."""

from .access_evaluator import (
    is_admin,
    is_document_owner,
    user_grants,
    evaluate_access,
    require_permission,
    require_read_permission,
    require_write_permission,
    require_delete_permission,
    get_highest_permission,
    can_manage_permissions,
    require_permission_manager,
    filter_accessible_documents,
)
from .permission_service import (
    PermissionService,
    PermissionCheck,
    GrantPermissionCommand,
    UpdatePermissionCommand,
    RevokePermissionCommand,
)

__all__ = [
    # Evaluator
    "is_admin",
    "is_document_owner",
    "user_grants",
    "evaluate_access",
    "require_permission",
    "require_read_permission",
    "require_write_permission",
    "require_delete_permission",
    "get_highest_permission",
    "can_manage_permissions",
    "require_permission_manager",
    "filter_accessible_documents",

    # Service
    "PermissionService",
    "PermissionCheck",
    "GrantPermissionCommand",
    "UpdatePermissionCommand",
    "RevokePermissionCommand",
]
