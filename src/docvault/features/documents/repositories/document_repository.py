"""AsyncPG-based document repository implementation.

A document and its versions are written in one transaction together with
the optional audit entry. Uniqueness on (document_id, version_number) and
(document_id, checksum) is left to the database; a losing concurrent
writer receives ConstraintError.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence
from uuid import UUID

import asyncpg

from ....core.exceptions import ConstraintError, DatabaseError
from ....core.value_objects import DocumentId, DocumentVersionId, UserId
from ....database import DRIVER_ERRORS
from ....utils import ensure_utc
from ...pagination.entities import PaginatedResult, PaginationParams
from ..entities import (
    AuditAction,
    AuditEntry,
    Checksum,
    ContentRef,
    Document,
    DocumentStatus,
    DocumentVersion,
    FileSize,
    Filename,
    MimeType,
    VersionNumber,
)
from ..utils import queries

logger = logging.getLogger(__name__)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class AsyncPGDocumentRepository:
    """AsyncPG implementation of DocumentRepository protocol."""

    def __init__(self, database_manager, schema: str = "public"):
        self._db = database_manager
        self._schema = schema

    def _q(self, query: str) -> str:
        return query.format(schema=self._schema)

    # Row mapping

    def _build_version_from_row(self, row: asyncpg.Record) -> DocumentVersion:
        """Build DocumentVersion entity from database row."""
        return DocumentVersion(
            id=DocumentVersionId(row['id']),
            document_id=DocumentId(row['document_id']),
            filename=Filename(row['filename']),
            original_name=Filename(row['original_name']),
            mime_type=MimeType(row['mime_type']),
            size=FileSize(row['size']),
            version_number=VersionNumber(row['version_number']),
            uploaded_by=UserId(row['uploaded_by']),
            created_at=ensure_utc(row['created_at']),
            path=row['path'],
            content_ref=ContentRef(row['content_ref']) if row['content_ref'] else None,
            checksum=Checksum(row['checksum'].strip()) if row['checksum'] else None,
        )

    def _build_document_from_row(
        self,
        row: asyncpg.Record,
        versions: Sequence[DocumentVersion] = ()
    ) -> Document:
        """Build Document aggregate from database row and its version rows."""
        return Document(
            id=DocumentId(row['id']),
            filename=Filename(row['filename']),
            original_name=Filename(row['original_name']),
            mime_type=MimeType(row['mime_type']),
            size=FileSize(row['size']),
            uploaded_by=UserId(row['uploaded_by']),
            created_at=ensure_utc(row['created_at']),
            updated_at=ensure_utc(row['updated_at']),
            status=DocumentStatus(row['status']),
            versions=tuple(versions),
        )

    async def _assemble(self, connection, rows: Sequence[asyncpg.Record]) -> List[Document]:
        """Attach versions to document rows with a single query."""
        if not rows:
            return []

        ids = [row['id'] for row in rows]
        version_rows = await connection.fetch(self._q(queries.VERSIONS_FOR_DOCUMENTS), ids)

        versions_by_document: Dict[UUID, List[DocumentVersion]] = defaultdict(list)
        for version_row in version_rows:
            versions_by_document[version_row['document_id']].append(self._build_version_from_row(version_row))

        return [self._build_document_from_row(row, versions_by_document[row['id']]) for row in rows]

    async def _find_one(self, query: str, *args) -> Optional[Document]:
        async with self._db.acquire() as connection:
            row = await connection.fetchrow(self._q(query), *args)
            documents = await self._assemble(connection, [row] if row else [])
        return documents[0] if documents else None

    async def _page(
        self,
        list_query: str,
        count_query: str,
        filter_args: Sequence,
        pagination: PaginationParams
    ) -> PaginatedResult[Document]:
        async with self._db.acquire() as connection:
            total = await connection.fetchval(self._q(count_query), *filter_args)
            rows = await connection.fetch(
                self._q(list_query), *filter_args, pagination.limit, pagination.offset
            )
            documents = await self._assemble(connection, rows)
        return PaginatedResult.from_params(documents, total, pagination)

    # Writes

    async def save(self, document: Document, audit: Optional[AuditEntry] = None) -> Document:
        try:
            async with self._db.transaction() as connection:
                await connection.execute(
                    self._q(queries.DOCUMENT_UPSERT),
                    document.id.value,
                    document.filename.value,
                    document.original_name.value,
                    document.mime_type.value,
                    document.size.value,
                    document.uploaded_by.value,
                    document.status.value,
                    document.created_at,
                    document.updated_at,
                )
                if document.versions:
                    await connection.executemany(
                        self._q(queries.VERSION_UPSERT),
                        [
                            (
                                v.id.value,
                                v.document_id.value,
                                v.version_number.value,
                                v.filename.value,
                                v.original_name.value,
                                v.mime_type.value,
                                v.size.value,
                                v.path,
                                v.content_ref.value if v.content_ref else None,
                                v.checksum.value if v.checksum else None,
                                v.uploaded_by.value,
                                v.created_at,
                            )
                            for v in document.versions
                        ]
                    )
                if audit is not None:
                    await self._insert_audit(connection, audit)
            return document
        except asyncpg.UniqueViolationError as e:
            constraint = getattr(e, "constraint_name", None)
            logger.warning(f"Constraint violation saving document {document.id}: {constraint}")
            raise ConstraintError(
                f"Concurrent modification of document {document.id}: {e}",
                constraint=constraint
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to save document {document.id}: {e}")
            raise DatabaseError(f"Failed to save document: {e}")

    async def delete(self, document_id: DocumentId, audit: Optional[AuditEntry] = None) -> bool:
        """Delete the document row; versions and grants cascade in the same transaction."""
        try:
            async with self._db.transaction() as connection:
                result = await connection.execute(self._q(queries.DOCUMENT_DELETE), document_id.value)
                deleted = result.split()[-1] != "0"
                if deleted and audit is not None:
                    await self._insert_audit(connection, audit)
            return deleted
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to delete document {document_id}: {e}")
            raise DatabaseError(f"Failed to delete document: {e}")

    # Lookups

    async def find_by_id(self, document_id: DocumentId) -> Optional[Document]:
        try:
            return await self._find_one(queries.DOCUMENT_GET_BY_ID, document_id.value)
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to get document {document_id}: {e}")
            raise DatabaseError(f"Failed to retrieve document: {e}")

    async def _find_by_version_column(self, query: str, value: str) -> Optional[Document]:
        document_id = await self._db.fetchval(self._q(query), value)
        if document_id is None:
            return None
        return await self._find_one(queries.DOCUMENT_GET_BY_ID, document_id)

    async def find_by_checksum(self, checksum: Checksum) -> Optional[Document]:
        try:
            return await self._find_by_version_column(queries.VERSION_DOCUMENT_BY_CHECKSUM, checksum.value)
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to find document by checksum {checksum.value[:12]}: {e}")
            raise DatabaseError(f"Failed to retrieve document: {e}")

    async def find_by_content_ref(self, content_ref: ContentRef) -> Optional[Document]:
        try:
            return await self._find_by_version_column(queries.VERSION_DOCUMENT_BY_CONTENT_REF, content_ref.value)
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to find document by content ref {content_ref}: {e}")
            raise DatabaseError(f"Failed to retrieve document: {e}")

    async def find_by_filename_and_user(self, filename: str, user_id: UserId) -> Optional[Document]:
        try:
            return await self._find_one(
                queries.DOCUMENT_GET_BY_FILENAME_AND_USER, str(filename).strip(), user_id.value
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to find document {filename} of user {user_id}: {e}")
            raise DatabaseError(f"Failed to retrieve document: {e}")

    async def list_by_user(self, user_id: UserId, pagination: PaginationParams) -> PaginatedResult[Document]:
        try:
            return await self._page(
                queries.DOCUMENT_LIST_BY_USER, queries.DOCUMENT_COUNT_BY_USER, [user_id.value], pagination
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to list documents of user {user_id}: {e}")
            raise DatabaseError(f"Failed to list documents: {e}")

    async def list_all(self, pagination: PaginationParams) -> PaginatedResult[Document]:
        try:
            return await self._page(queries.DOCUMENT_LIST_ALL, queries.DOCUMENT_COUNT_ALL, [], pagination)
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to list documents: {e}")
            raise DatabaseError(f"Failed to list documents: {e}")

    async def search(self, query: str, pagination: PaginationParams) -> PaginatedResult[Document]:
        try:
            return await self._page(
                queries.DOCUMENT_SEARCH, queries.DOCUMENT_SEARCH_COUNT, [_like_pattern(query)], pagination
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to search documents for {query!r}: {e}")
            raise DatabaseError(f"Failed to search documents: {e}")

    # Audit

    async def _insert_audit(self, connection, entry: AuditEntry) -> None:
        await connection.execute(
            self._q(queries.AUDIT_INSERT),
            entry.id,
            entry.document_id.value,
            entry.action.value,
            entry.performed_by.value,
            entry.details,
            entry.performed_at,
        )

    async def add_audit(
        self,
        document_id: DocumentId,
        action: AuditAction,
        performed_by: UserId,
        details: Optional[str] = None
    ) -> AuditEntry:
        entry = AuditEntry(document_id=document_id, action=action, performed_by=performed_by, details=details)
        try:
            async with self._db.acquire() as connection:
                await self._insert_audit(connection, entry)
            return entry
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to add audit entry {action.value} for document {document_id}: {e}")
            raise DatabaseError(f"Failed to add audit entry: {e}")

    async def list_audit(self, document_id: DocumentId) -> List[AuditEntry]:
        try:
            rows = await self._db.fetch(self._q(queries.AUDIT_LIST_BY_DOCUMENT), document_id.value)
            return [
                AuditEntry(
                    id=row['id'],
                    document_id=DocumentId(row['document_id']),
                    action=AuditAction(row['action']),
                    performed_by=UserId(row['performed_by']),
                    details=row['details'],
                    performed_at=ensure_utc(row['performed_at']),
                )
                for row in rows
            ]
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to list audit entries for document {document_id}: {e}")
            raise DatabaseError(f"Failed to list audit entries: {e}")
