"""Document workflows: upload, read, list, search and delete.

Each mutating operation checks access against the loaded grants before
the aggregate changes, and records an audit entry with the change.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ....core.exceptions import DocVaultError, ForbiddenError, NotFoundError
from ....core.value_objects import DocumentId, DocumentVersionId, UserId
from ...pagination.entities import MAX_PAGE_LIMIT, PaginatedResult, PaginationParams
from ...permissions.entities import DocumentPermission, PermissionType
from ...permissions.services import (
    filter_accessible_documents,
    is_admin,
    require_delete_permission,
    require_read_permission,
    require_write_permission,
)
from ...users.entities import User
from ..entities import (
    AuditAction,
    AuditEntry,
    Checksum,
    Document,
    DocumentVersion,
    VersionData,
    validate_no_duplicate_content,
)
from ..exceptions import ChecksumMismatchError
from .base import DocumentWorkflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadDocumentCommand:
    """Direct upload of bytes already staged at ``temp_path``.

    Without ``document_id`` a new document is created; with it the bytes
    become the next version of that document.
    """
    temp_path: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    uploaded_by: UserId
    document_id: Optional[DocumentId] = None
    checksum: Union[Checksum, str, None] = None


class DocumentService(DocumentWorkflow):
    """Service orchestrating document reads and writes."""

    def _pagination(self, pagination: Optional[PaginationParams]) -> PaginationParams:
        return pagination or PaginationParams(limit=self.settings.default_page_size)

    async def upload_document(self, command: UploadDocumentCommand) -> Document:
        """Store uploaded bytes as a new document or a new version.

        Raises:
            NotFoundError: unknown user or document
            InsufficientPermissionError: adding a version without WRITE
            DuplicateDocumentError: the content matches an existing version
            ChecksumMismatchError: the stored bytes differ from ``command.checksum``
        """
        user = await self._load_user(command.uploaded_by)
        self._check_size(command.size)
        declared = Checksum(command.checksum) if isinstance(command.checksum, str) else command.checksum

        if command.document_id is not None:
            document = await self._load_document(command.document_id)
            require_write_permission(user, document, await self._permissions(document.id))
            action = AuditAction.NEW_VERSION
        else:
            document = Document.create(
                filename=command.filename,
                original_name=command.original_name,
                mime_type=command.mime_type,
                size=command.size,
                uploaded_by=user.id,
            )
            action = AuditAction.CREATED

        # Reject known duplicates before touching storage
        validate_no_duplicate_content(document.versions, declared)

        version_id = DocumentVersionId.generate()
        stored = await self.storage.move_to_storage(command.temp_path, command.filename)
        try:
            actual = Checksum(stored.checksum)
            if declared is not None and not declared.matches(actual):
                raise ChecksumMismatchError(version_id=version_id, expected=declared.value, actual=actual.value)

            updated = document.add_version(
                VersionData(
                    filename=command.filename,
                    original_name=command.original_name,
                    mime_type=command.mime_type,
                    size=stored.size,
                    uploaded_by=user.id,
                    checksum=actual,
                    path=stored.path,
                    content_ref=stored.content_ref,
                    version_id=version_id,
                )
            )
            version = updated.get_version(version_id)
            saved = await self.document_repository.save(
                updated,
                audit=AuditEntry(
                    document_id=updated.id,
                    action=action,
                    performed_by=user.id,
                    details=f"Version {version.version_number} uploaded",
                )
            )
        except DocVaultError:
            # Nothing references the stored bytes
            await self.storage.delete_file(stored.path)
            raise

        logger.info(f"Uploaded version {version.version_number} of document {saved.id} by {user.id}")
        return saved

    async def get_document(self, document_id: DocumentId, user_id: UserId) -> Document:
        document = await self._load_document(document_id)
        user = await self._load_user(user_id)
        require_read_permission(user, document, await self._permissions(document_id))
        return document

    async def get_document_version(
        self,
        document_id: DocumentId,
        version_id: DocumentVersionId,
        user_id: UserId
    ) -> DocumentVersion:
        document = await self.get_document(document_id, user_id)
        version = document.get_version(version_id)
        if version is None:
            raise NotFoundError("DocumentVersion", version_id)
        return version

    async def list_document_versions(self, document_id: DocumentId, user_id: UserId) -> List[DocumentVersion]:
        """All versions of a document, oldest first."""
        document = await self.get_document(document_id, user_id)
        return list(document.versions)

    async def list_documents(
        self,
        user_id: UserId,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResult[Document]:
        """Documents uploaded by ``user_id``."""
        return await self.document_repository.list_by_user(user_id, self._pagination(pagination))

    async def list_all_documents(
        self,
        user_id: UserId,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResult[Document]:
        user = await self._load_user(user_id)
        if not is_admin(user):
            logger.warning(f"Non-admin user {user_id} attempted to list all documents")
            raise ForbiddenError("Only administrators can list all documents", resource="Documents")
        return await self.document_repository.list_all(self._pagination(pagination))

    async def search_documents(
        self,
        user_id: UserId,
        query: str,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResult[Document]:
        """Search by filename, keeping only documents the user can read.

        The read filter runs before pagination, so pages are filled with
        readable matches and ``total`` counts all of them. An unknown user
        gets an empty page instead of an error.
        """
        pagination = self._pagination(pagination)
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logger.warning(f"Search by unknown user {user_id}; returning no results")
            return PaginatedResult.empty(pagination)

        if is_admin(user):
            return await self.document_repository.search(query, pagination)

        readable = await self._readable_matches(user, query)
        items = readable[pagination.offset:pagination.offset + pagination.limit]
        return PaginatedResult.from_params(items, len(readable), pagination)

    async def _readable_matches(self, user: User, query: str) -> List[Document]:
        """Every search match ``user`` may read, in repository order."""
        permissions_by_document: Dict[DocumentId, List[DocumentPermission]] = defaultdict(list)
        for permission in await self.permission_repository.find_by_user(user.id):
            permissions_by_document[permission.document_id].append(permission)

        readable: List[Document] = []
        page = 1
        while True:
            batch = await self.document_repository.search(query, PaginationParams(page=page, limit=MAX_PAGE_LIMIT))
            readable.extend(
                filter_accessible_documents(user, batch.items, permissions_by_document, PermissionType.READ)
            )
            if not batch.items or not batch.has_next_page:
                return readable
            page += 1

    async def delete_document(self, document_id: DocumentId, user_id: UserId) -> None:
        """Delete a document with all of its versions, grants and stored files.

        Rows go first. The document, its versions and the ``deleted`` audit
        entry are removed and written together (grants follow through the
        foreign key in PostgreSQL and explicitly for other stores). Stored
        files are removed only after that; a file that cannot be removed is
        logged and left behind.
        """
        document = await self._load_document(document_id)
        user = await self._load_user(user_id)
        require_delete_permission(user, document, await self._permissions(document_id))

        deleted = await self.document_repository.delete(
            document_id,
            audit=AuditEntry(
                document_id=document_id,
                action=AuditAction.DELETED,
                performed_by=user.id,
                details=f"Document {document.filename} deleted with {document.version_count} versions",
            )
        )
        if not deleted:
            raise NotFoundError("Document", document_id)
        await self.permission_repository.delete_by_document(document_id)

        for version in document.versions:
            if not version.path:
                continue
            try:
                await self.storage.delete_file(version.path)
            except (DocVaultError, OSError) as e:
                logger.warning(f"Could not remove {version.path} of deleted document {document_id}: {e}")

        logger.info(f"Deleted document {document_id} by {user_id}")

    async def get_download_url(
        self,
        document_id: DocumentId,
        user_id: UserId,
        version_id: Optional[DocumentVersionId] = None
    ) -> str:
        """Download URL for a version (the latest by default)."""
        document = await self.get_document(document_id, user_id)
        version = document.get_version(version_id) if version_id else document.get_latest_version()
        if version is None:
            raise NotFoundError("DocumentVersion", version_id or document_id)
        if not version.is_confirmed:
            raise NotFoundError(
                "File",
                version.id,
                message=f"Version {version.version_number} of document {document_id} has no stored content yet"
            )
        return await self.storage.get_download_url(version.path, self.settings.download_url_ttl_seconds)
