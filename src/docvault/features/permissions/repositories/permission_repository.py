"""AsyncPG-based document permission repository implementation."""

import logging
from typing import List, Optional

import asyncpg

from ....core.exceptions import ConstraintError, DatabaseError
from ....core.value_objects import DocumentId, PermissionId, UserId
from ....database import DRIVER_ERRORS
from ....utils import ensure_utc
from ..entities import DocumentPermission, PermissionType

logger = logging.getLogger(__name__)

_COLUMNS = "id, document_id, user_id, permission, granted_by, granted_at"


class AsyncPGPermissionRepository:
    """AsyncPG implementation of PermissionRepository protocol."""

    def __init__(self, database_manager, schema: str = "public"):
        self._db = database_manager
        self._schema = schema
        self._table = f"{schema}.document_permissions"

    def _build_permission_from_row(self, row: asyncpg.Record) -> DocumentPermission:
        """Build DocumentPermission entity from database row."""
        return DocumentPermission(
            id=PermissionId(row['id']),
            document_id=DocumentId(row['document_id']),
            user_id=UserId(row['user_id']),
            permission=PermissionType(row['permission']),
            granted_by=UserId(row['granted_by']),
            granted_at=ensure_utc(row['granted_at']),
        )

    async def save(self, permission: DocumentPermission) -> DocumentPermission:
        """Insert a grant, or update the level of the grant with the same id."""
        try:
            row = await self._db.fetchrow(
                f"""
                INSERT INTO {self._table} ({_COLUMNS})
                VALUES ($1, $2, $3, $4, $5, $6)
                ON CONFLICT (id) DO UPDATE SET permission = EXCLUDED.permission
                RETURNING {_COLUMNS}
                """,
                permission.id.value,
                permission.document_id.value,
                permission.user_id.value,
                permission.permission.value,
                permission.granted_by.value,
                permission.granted_at,
            )
            return self._build_permission_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise ConstraintError(
                f"User {permission.user_id} already has a permission on document {permission.document_id}",
                constraint=getattr(e, "constraint_name", None)
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to save permission {permission.id}: {e}")
            raise DatabaseError(f"Failed to save permission: {e}")

    async def find_by_id(self, permission_id: PermissionId) -> Optional[DocumentPermission]:
        try:
            row = await self._db.fetchrow(
                f"SELECT {_COLUMNS} FROM {self._table} WHERE id = $1",
                permission_id.value
            )
            return self._build_permission_from_row(row) if row else None
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to get permission {permission_id}: {e}")
            raise DatabaseError(f"Failed to retrieve permission: {e}")

    async def find_by_document(self, document_id: DocumentId) -> List[DocumentPermission]:
        try:
            rows = await self._db.fetch(
                f"SELECT {_COLUMNS} FROM {self._table} WHERE document_id = $1 ORDER BY granted_at",
                document_id.value
            )
            return [self._build_permission_from_row(row) for row in rows]
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to list permissions for document {document_id}: {e}")
            raise DatabaseError(f"Failed to retrieve permissions: {e}")

    async def find_by_user_and_document(
        self,
        user_id: UserId,
        document_id: DocumentId
    ) -> Optional[DocumentPermission]:
        try:
            row = await self._db.fetchrow(
                f"SELECT {_COLUMNS} FROM {self._table} WHERE user_id = $1 AND document_id = $2",
                user_id.value,
                document_id.value
            )
            return self._build_permission_from_row(row) if row else None
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to get permission of user {user_id} on document {document_id}: {e}")
            raise DatabaseError(f"Failed to retrieve permission: {e}")

    async def find_by_user(self, user_id: UserId) -> List[DocumentPermission]:
        try:
            rows = await self._db.fetch(
                f"SELECT {_COLUMNS} FROM {self._table} WHERE user_id = $1 ORDER BY granted_at",
                user_id.value
            )
            return [self._build_permission_from_row(row) for row in rows]
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to list permissions for user {user_id}: {e}")
            raise DatabaseError(f"Failed to retrieve permissions: {e}")

    async def delete(self, permission_id: PermissionId) -> bool:
        try:
            result = await self._db.execute(
                f"DELETE FROM {self._table} WHERE id = $1",
                permission_id.value
            )
            return result.split()[-1] != "0"
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to delete permission {permission_id}: {e}")
            raise DatabaseError(f"Failed to delete permission: {e}")

    async def has_permission(
        self,
        user_id: UserId,
        document_id: DocumentId,
        required: PermissionType
    ) -> bool:
        granting = [p.value for p in PermissionType if p.satisfies(required)]
        try:
            return await self._db.fetchval(
                f"""
                SELECT EXISTS(
                    SELECT 1 FROM {self._table}
                    WHERE user_id = $1 AND document_id = $2 AND permission = ANY($3::varchar[])
                )
                """,
                user_id.value,
                document_id.value,
                granting
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to check permission of user {user_id} on document {document_id}: {e}")
            raise DatabaseError(f"Failed to check permission: {e}")

    async def delete_by_document(self, document_id: DocumentId) -> int:
        try:
            result = await self._db.execute(
                f"DELETE FROM {self._table} WHERE document_id = $1",
                document_id.value
            )
            return int(result.split()[-1])
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to delete permissions for document {document_id}: {e}")
            raise DatabaseError(f"Failed to delete permissions: {e}")
