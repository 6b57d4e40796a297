"""docvault - versioned document storage with document-level access control.

The Document aggregate assigns version numbers and rejects duplicate
content; the permission evaluator resolves admin, owner and explicit-grant
access for every workflow. Persistence and blob storage sit behind async
ports with asyncpg, in-memory and local filesystem implementations.

Logging is not configured on import; call ``setup_logging()`` at startup.
"""

from .__version__ import __version__

from .config import DocVaultSettings, get_settings, setup_logging

from .core.exceptions import (
    DocVaultError,
    BusinessLogicError,
    AuthorizationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
    ForbiddenError,
    ConstraintError,
    create_error_response,
)
from .core.value_objects import DocumentId, DocumentVersionId, UserId, PermissionId

from .features.pagination import PaginationParams, PaginatedResult
from .features.users import User, UserRole
from .features.documents import (
    Document,
    DocumentVersion,
    DocumentStatus,
    VersionData,
    Checksum,
    DuplicateDocumentError,
    ChecksumMismatchError,
)
from .features.permissions import (
    PermissionType,
    DocumentPermission,
    InsufficientPermissionError,
    CannotRevokeOwnerPermissionError,
    evaluate_access,
    PermissionService,
)
from .features.documents.services import DocumentService, UploadService

__all__ = [
    "__version__",

    # Configuration
    "DocVaultSettings",
    "get_settings",
    "setup_logging",

    # Exceptions
    "DocVaultError",
    "BusinessLogicError",
    "AuthorizationError",
    "DatabaseError",
    "NotFoundError",
    "ValidationError",
    "ForbiddenError",
    "ConstraintError",
    "DuplicateDocumentError",
    "ChecksumMismatchError",
    "InsufficientPermissionError",
    "CannotRevokeOwnerPermissionError",
    "create_error_response",

    # Identifiers
    "DocumentId",
    "DocumentVersionId",
    "UserId",
    "PermissionId",

    # Domain
    "Document",
    "DocumentVersion",
    "DocumentStatus",
    "VersionData",
    "Checksum",
    "PermissionType",
    "DocumentPermission",
    "User",
    "UserRole",
    "PaginationParams",
    "PaginatedResult",
    "evaluate_access",

    # Services
    "DocumentService",
    "UploadService",
    "PermissionService",
]
