"""Protocol interfaces for the permissions feature."""

from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import DocumentId, PermissionId, UserId
from .document_permission import DocumentPermission
from .permission_type import PermissionType


@runtime_checkable
class PermissionRepository(Protocol):
    """Persistence contract for explicit document grants.

    Implementations enforce uniqueness of (document_id, user_id) and raise
    ConstraintError when a second grant for the same pair is inserted.
    """

    async def save(self, permission: DocumentPermission) -> DocumentPermission:
        """Insert a new grant or update the level of an existing one (matched by id)."""
        ...

    async def find_by_id(self, permission_id: PermissionId) -> Optional[DocumentPermission]:
        ...

    async def find_by_document(self, document_id: DocumentId) -> List[DocumentPermission]:
        ...

    async def find_by_user_and_document(
        self,
        user_id: UserId,
        document_id: DocumentId
    ) -> Optional[DocumentPermission]:
        ...

    async def find_by_user(self, user_id: UserId) -> List[DocumentPermission]:
        ...

    async def delete(self, permission_id: PermissionId) -> bool:
        """Delete a grant. Returns False if it did not exist."""
        ...

    async def has_permission(
        self,
        user_id: UserId,
        document_id: DocumentId,
        required: PermissionType
    ) -> bool:
        """Whether an explicit grant at or above ``required`` exists."""
        ...

    async def delete_by_document(self, document_id: DocumentId) -> int:
        """Delete every grant on a document. Returns the number removed."""
        ...
