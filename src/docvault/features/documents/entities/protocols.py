"""Protocol interfaces for the documents feature.

Repository and storage ports are async and may fail; implementations
surface uniqueness violations as ConstraintError and other persistence
failures as DatabaseError.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import DocumentId, DocumentVersionId, UserId
from ...pagination.entities import PaginatedResult, PaginationParams
from .audit_entry import AuditAction, AuditEntry
from .checksum import Checksum
from .content_ref import ContentRef
from .document import Document


@runtime_checkable
class DocumentRepository(Protocol):
    """Persistence contract for Document aggregates.

    Implementations must reject a second version with the same
    (document_id, version_number) or (document_id, checksum) with
    ConstraintError so that racing writers cannot both succeed.
    """

    async def save(self, document: Document, audit: Optional[AuditEntry] = None) -> Document:
        """Insert or update a document and its versions.

        When ``audit`` is given it is written in the same transaction.
        """
        ...

    async def find_by_id(self, document_id: DocumentId) -> Optional[Document]:
        """Get a document with its full version history, or None."""
        ...

    async def find_by_checksum(self, checksum: Checksum) -> Optional[Document]:
        """Get the document owning a version with this checksum, across all documents."""
        ...

    async def find_by_content_ref(self, content_ref: ContentRef) -> Optional[Document]:
        """Get the document owning a version stored under ``content_ref``."""
        ...

    async def find_by_filename_and_user(self, filename: str, user_id: UserId) -> Optional[Document]:
        """Get a document uploaded by ``user_id`` under ``filename``."""
        ...

    async def list_by_user(self, user_id: UserId, pagination: PaginationParams) -> PaginatedResult[Document]:
        """Page through documents uploaded by a user, newest first."""
        ...

    async def list_all(self, pagination: PaginationParams) -> PaginatedResult[Document]:
        """Page through every document, newest first."""
        ...

    async def search(self, query: str, pagination: PaginationParams) -> PaginatedResult[Document]:
        """Case-insensitive substring search over filename and original name."""
        ...

    async def delete(self, document_id: DocumentId, audit: Optional[AuditEntry] = None) -> bool:
        """Delete a document, its versions and its grants, recording ``audit`` with the delete.

        Returns False, without recording anything, if the document did not exist.
        """
        ...

    async def add_audit(
        self,
        document_id: DocumentId,
        action: AuditAction,
        performed_by: UserId,
        details: Optional[str] = None
    ) -> AuditEntry:
        """Append an audit entry."""
        ...

    async def list_audit(self, document_id: DocumentId) -> List[AuditEntry]:
        """Audit entries for a document, oldest first."""
        ...


@dataclass(frozen=True)
class PresignedUpload:
    """Upload target handed to a client during two-phase upload."""

    url: str
    upload_path: str
    expires_at: datetime


@dataclass(frozen=True)
class StoredFile:
    """Result of moving uploaded bytes into permanent storage."""

    path: str
    content_ref: str
    size: int
    checksum: str


@dataclass(frozen=True)
class StoredFileMetadata:
    """Metadata of an object in storage."""

    size: int
    last_modified: datetime
    content_type: str
    etag: Optional[str] = None


@runtime_checkable
class StoragePort(Protocol):
    """Blob storage contract."""

    async def generate_presigned_upload_url(
        self,
        filename: str,
        mime_type: str,
        document_id: DocumentId,
        version_id: DocumentVersionId
    ) -> PresignedUpload:
        """Reserve a temporary upload location and return a signed target for it."""
        ...

    async def move_to_storage(self, temp_path: str, filename: str) -> StoredFile:
        """Move uploaded bytes into permanent storage, computing their SHA-256."""
        ...

    async def delete_file(self, path: str) -> None:
        """Delete a stored object. Missing objects are not an error."""
        ...

    async def get_download_url(self, path: str, ttl_seconds: int) -> str:
        """URL for downloading ``path``, valid for ``ttl_seconds`` where the backend enforces expiry."""
        ...

    async def file_exists(self, path: str) -> bool:
        ...

    async def get_file_metadata(self, path: str) -> Optional[StoredFileMetadata]:
        """Metadata for ``path``, or None if it does not exist."""
        ...
