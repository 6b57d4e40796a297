"""In-memory document permission repository for tests and local runs."""

import asyncio
from typing import Dict, List, Optional

from ....core.exceptions import ConstraintError
from ....core.value_objects import DocumentId, PermissionId, UserId
from ..entities import DocumentPermission, PermissionType


class InMemoryPermissionRepository:
    """Dict-backed implementation of PermissionRepository protocol.

    Enforces the same (document_id, user_id) uniqueness as the database.
    """

    def __init__(self):
        self._permissions: Dict[PermissionId, DocumentPermission] = {}
        self._lock = asyncio.Lock()

    async def save(self, permission: DocumentPermission) -> DocumentPermission:
        async with self._lock:
            for other in self._permissions.values():
                if (
                    other.id != permission.id
                    and other.document_id == permission.document_id
                    and other.user_id == permission.user_id
                ):
                    raise ConstraintError(
                        f"User {permission.user_id} already has a permission on document {permission.document_id}",
                        constraint="uq_document_permissions_user"
                    )

            existing = self._permissions.get(permission.id)
            # updates only ever change the level
            stored = existing.with_permission(permission.permission) if existing else permission
            self._permissions[permission.id] = stored
            return stored

    async def find_by_id(self, permission_id: PermissionId) -> Optional[DocumentPermission]:
        return self._permissions.get(permission_id)

    async def find_by_document(self, document_id: DocumentId) -> List[DocumentPermission]:
        return sorted(
            (p for p in self._permissions.values() if p.document_id == document_id),
            key=lambda p: p.granted_at
        )

    async def find_by_user_and_document(
        self,
        user_id: UserId,
        document_id: DocumentId
    ) -> Optional[DocumentPermission]:
        for permission in self._permissions.values():
            if permission.user_id == user_id and permission.document_id == document_id:
                return permission
        return None

    async def find_by_user(self, user_id: UserId) -> List[DocumentPermission]:
        return sorted(
            (p for p in self._permissions.values() if p.user_id == user_id),
            key=lambda p: p.granted_at
        )

    async def delete(self, permission_id: PermissionId) -> bool:
        async with self._lock:
            return self._permissions.pop(permission_id, None) is not None

    async def has_permission(
        self,
        user_id: UserId,
        document_id: DocumentId,
        required: PermissionType
    ) -> bool:
        permission = await self.find_by_user_and_document(user_id, document_id)
        return permission is not None and permission.grants(required)

    async def delete_by_document(self, document_id: DocumentId) -> int:
        async with self._lock:
            doomed = [pid for pid, p in self._permissions.items() if p.document_id == document_id]
            for permission_id in doomed:
                del self._permissions[permission_id]
            return len(doomed)
