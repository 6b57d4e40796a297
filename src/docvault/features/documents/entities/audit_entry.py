"""Audit trail entry for document operations."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from ....core.value_objects import DocumentId, UserId
from ....utils import generate_uuid_v7, utc_now


class AuditAction(str, Enum):
    """Actions recorded in the document audit trail."""
    CREATED = "created"
    NEW_VERSION = "new_version"
    UPLOAD_INITIATED = "upload_initiated"
    UPLOAD_CONFIRMED = "upload_confirmed"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
    DELETED = "deleted"
    PERMISSION_GRANTED = "permission_granted"
    PERMISSION_UPDATED = "permission_updated"
    PERMISSION_REVOKED = "permission_revoked"


@dataclass(frozen=True)
class AuditEntry:
    """One row of the append-only audit trail.

    Entries reference documents by ID only and outlive document deletion.
    """

    document_id: DocumentId
    action: AuditAction
    performed_by: UserId
    details: Optional[str] = None
    id: UUID = field(default_factory=lambda: UUID(generate_uuid_v7()))
    performed_at: datetime = field(default_factory=utc_now)
