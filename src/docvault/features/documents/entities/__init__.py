"""Document entities, value objects and protocols."""

from .filename import Filename, MAX_FILENAME_LENGTH
from .mime_type import MimeType
from .file_size import FileSize, MIN_FILE_SIZE, MAX_FILE_SIZE
from .version_number import VersionNumber
from .checksum import Checksum
from .content_ref import ContentRef
from .document_status import DocumentStatus
from .document_version import DocumentVersion
from .guards import validate_no_duplicate_content, find_duplicate_version
from .document import Document, VersionData
from .audit_entry import AuditAction, AuditEntry
from .protocols import (
    DocumentRepository,
    StoragePort,
    PresignedUpload,
    StoredFile,
    StoredFileMetadata,
)

__all__ = [
    # Value objects
    "Filename",
    "MimeType",
    "FileSize",
    "VersionNumber",
    "Checksum",
    "ContentRef",
    "DocumentStatus",
    "MAX_FILENAME_LENGTH",
    "MIN_FILE_SIZE",
    "MAX_FILE_SIZE",

    # Aggregate
    "Document",
    "DocumentVersion",
    "VersionData",
    "validate_no_duplicate_content",
    "find_duplicate_version",

    # Audit
    "AuditAction",
    "AuditEntry",

    # Protocols
    "DocumentRepository",
    "StoragePort",
    "PresignedUpload",
    "StoredFile",
    "StoredFileMetadata",
]
