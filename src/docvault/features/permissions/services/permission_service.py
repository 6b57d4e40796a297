"""Permission service for grant management.

Grants, updates, revokes and lists explicit document permissions. Only
admins and the document owner may manage grants; the owner's own access
can never be revoked.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ....core.exceptions import NotFoundError
from ....core.value_objects import DocumentId, PermissionId, UserId
from ...documents.entities import AuditAction, Document, DocumentRepository
from ...users.entities import User, UserRepository
from ..entities import DocumentPermission, PermissionRepository, PermissionType
from ..exceptions import CannotRevokeOwnerPermissionError
from .access_evaluator import evaluate_access, get_highest_permission, require_permission_manager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrantPermissionCommand:
    document_id: DocumentId
    user_id: UserId
    permission: PermissionType
    granted_by: UserId


@dataclass(frozen=True)
class UpdatePermissionCommand:
    permission_id: PermissionId
    permission: PermissionType
    updated_by: UserId


@dataclass(frozen=True)
class RevokePermissionCommand:
    permission_id: PermissionId
    revoked_by: UserId


@dataclass(frozen=True)
class PermissionCheck:
    """Answer to "may this user do X", plus the best level they hold."""
    has_permission: bool
    permission: Optional[PermissionType] = None


class PermissionService:
    """Service orchestrating document grant operations."""

    def __init__(
        self,
        permission_repository: PermissionRepository,
        document_repository: DocumentRepository,
        user_repository: UserRepository
    ):
        self.permission_repository = permission_repository
        self.document_repository = document_repository
        self.user_repository = user_repository

    async def _load_document(self, document_id: DocumentId) -> Document:
        document = await self.document_repository.find_by_id(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    async def _load_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def _load_permission(self, permission_id: PermissionId) -> DocumentPermission:
        permission = await self.permission_repository.find_by_id(permission_id)
        if permission is None:
            raise NotFoundError("Permission", permission_id)
        return permission

    async def grant_permission(self, command: GrantPermissionCommand) -> DocumentPermission:
        """Grant ``command.permission`` to a user, upserting by (user, document).

        Re-granting only changes the level: the original id, granted_by and
        granted_at are kept and the new granter is recorded in the audit trail.
        """
        document = await self._load_document(command.document_id)
        await self._load_user(command.user_id)
        granter = await self._load_user(command.granted_by)
        require_permission_manager(granter, document, action="grant")

        existing = await self.permission_repository.find_by_user_and_document(
            command.user_id, command.document_id
        )
        if existing is not None:
            permission = await self.permission_repository.save(existing.with_permission(command.permission))
            details = (
                f"Permission for user {command.user_id} changed from {existing.permission.value} "
                f"to {command.permission.value} by {command.granted_by}"
            )
        else:
            permission = await self.permission_repository.save(
                DocumentPermission.create(
                    document_id=command.document_id,
                    user_id=command.user_id,
                    permission=command.permission,
                    granted_by=command.granted_by,
                )
            )
            details = f"{command.permission.value} granted to user {command.user_id}"

        await self.document_repository.add_audit(
            command.document_id, AuditAction.PERMISSION_GRANTED, command.granted_by, details
        )
        logger.info(f"Granted {command.permission.value} on document {command.document_id} to {command.user_id}")
        return permission

    async def update_permission(self, command: UpdatePermissionCommand) -> DocumentPermission:
        permission = await self._load_permission(command.permission_id)
        document = await self._load_document(permission.document_id)
        updater = await self._load_user(command.updated_by)
        require_permission_manager(
            updater, document, action="update", resource=f"Permission:{command.permission_id}"
        )

        updated = await self.permission_repository.save(permission.with_permission(command.permission))
        await self.document_repository.add_audit(
            permission.document_id,
            AuditAction.PERMISSION_UPDATED,
            command.updated_by,
            f"Permission {command.permission_id} updated to {command.permission.value}",
        )
        logger.info(f"Updated permission {command.permission_id} to {command.permission.value}")
        return updated

    async def revoke_permission(self, command: RevokePermissionCommand) -> None:
        """Delete a grant.

        The owner check runs before caller authorization, so revoking the
        owner fails the same way for every caller.
        """
        permission = await self._load_permission(command.permission_id)
        document = await self._load_document(permission.document_id)

        if permission.user_id == document.uploaded_by:
            raise CannotRevokeOwnerPermissionError(document_id=document.id)

        revoker = await self._load_user(command.revoked_by)
        require_permission_manager(
            revoker, document, action="revoke", resource=f"Permission:{command.permission_id}"
        )

        await self.permission_repository.delete(command.permission_id)
        await self.document_repository.add_audit(
            permission.document_id,
            AuditAction.PERMISSION_REVOKED,
            command.revoked_by,
            f"Permission {command.permission_id} revoked from user {permission.user_id}",
        )
        logger.info(f"Revoked permission {command.permission_id} on document {permission.document_id}")

    async def list_document_permissions(
        self,
        document_id: DocumentId,
        user_id: UserId
    ) -> List[DocumentPermission]:
        document = await self._load_document(document_id)
        user = await self._load_user(user_id)
        require_permission_manager(user, document, action="list")
        return await self.permission_repository.find_by_document(document_id)

    async def list_user_permissions(self, user_id: UserId) -> List[DocumentPermission]:
        return await self.permission_repository.find_by_user(user_id)

    async def check_permission(
        self,
        document_id: DocumentId,
        user_id: UserId,
        required: PermissionType
    ) -> PermissionCheck:
        document = await self._load_document(document_id)
        user = await self._load_user(user_id)
        permissions = await self.permission_repository.find_by_document(document_id)
        return PermissionCheck(
            has_permission=evaluate_access(user, document, permissions, required),
            permission=get_highest_permission(user, document, permissions),
        )
