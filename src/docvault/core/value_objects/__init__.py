"""Identifier value objects shared across features."""

from .identifiers import DocumentId, DocumentVersionId, UserId, PermissionId

__all__ = [
    "DocumentId",
    "DocumentVersionId",
    "UserId",
    "PermissionId",
]
