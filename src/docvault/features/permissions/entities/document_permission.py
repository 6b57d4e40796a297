"""Document permission entity.

An explicit grant of one access level to one user on one document. At
most one grant exists per (document, user).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from ....core.value_objects import DocumentId, PermissionId, UserId
from ....utils import utc_now
from .permission_type import PermissionType


@dataclass(frozen=True)
class DocumentPermission:
    """Explicit per-user grant on a document."""

    id: PermissionId
    document_id: DocumentId
    user_id: UserId
    permission: PermissionType
    granted_by: UserId
    granted_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if not isinstance(self.permission, PermissionType):
            object.__setattr__(self, 'permission', PermissionType.from_string(self.permission))

    @classmethod
    def create(
        cls,
        document_id: DocumentId,
        user_id: UserId,
        permission: PermissionType,
        granted_by: UserId
    ) -> 'DocumentPermission':
        return cls(
            id=PermissionId.generate(),
            document_id=document_id,
            user_id=user_id,
            permission=permission,
            granted_by=granted_by,
            granted_at=utc_now(),
        )

    def with_permission(self, permission: PermissionType) -> 'DocumentPermission':
        """Copy with a new level; id, granted_by and granted_at are kept."""
        return replace(self, permission=permission)

    def grants(self, required: PermissionType) -> bool:
        return self.permission.satisfies(required)
