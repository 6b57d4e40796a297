"""Permission entities and protocols."""

from .permission_type import PermissionType, PERMISSION_HIERARCHY
from .document_permission import DocumentPermission
from .protocols import PermissionRepository

__all__ = [
    "PermissionType",
    "PERMISSION_HIERARCHY",
    "DocumentPermission",
    "PermissionRepository",
]
