"""Documents feature for docvault.

Feature-First architecture for versioned documents:
- entities/: value objects, the Document aggregate, the duplicate-content
  guard, audit entries and repository/storage protocols
- repositories/: asyncpg and in-memory document storage
- services/: upload, read, delete and two-phase upload workflows

Services depend on the permissions feature, which itself depends on these
entities, so they are imported from ``docvault.features.documents.services``
rather than re-exported here.
"""

from .entities import (
    Filename,
    MimeType,
    FileSize,
    VersionNumber,
    Checksum,
    ContentRef,
    DocumentStatus,
    Document,
    DocumentVersion,
    VersionData,
    validate_no_duplicate_content,
    AuditAction,
    AuditEntry,
    DocumentRepository,
    StoragePort,
    PresignedUpload,
    StoredFile,
    StoredFileMetadata,
)
from .exceptions import DuplicateDocumentError, ChecksumMismatchError
from .repositories import AsyncPGDocumentRepository, InMemoryDocumentRepository

__all__ = [
    # Value objects
    "Filename",
    "MimeType",
    "FileSize",
    "VersionNumber",
    "Checksum",
    "ContentRef",
    "DocumentStatus",

    # Aggregate
    "Document",
    "DocumentVersion",
    "VersionData",
    "validate_no_duplicate_content",

    # Audit
    "AuditAction",
    "AuditEntry",

    # Protocols
    "DocumentRepository",
    "StoragePort",
    "PresignedUpload",
    "StoredFile",
    "StoredFileMetadata",

    # Exceptions
    "DuplicateDocumentError",
    "ChecksumMismatchError",

    # Repository Implementations
    "AsyncPGDocumentRepository",
    "InMemoryDocumentRepository",
]
