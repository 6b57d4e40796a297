"""Two-phase upload and publication workflows.

``initiate_upload`` reserves a DRAFT version carrying the client's declared
checksum and hands back an upload target. ``confirm_upload`` checks the
landed bytes against that checksum and records where they live.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ....core.exceptions import DocVaultError, NotFoundError, ValidationError
from ....core.value_objects import DocumentId, DocumentVersionId, UserId
from ...permissions.entities import PermissionType
from ...permissions.services import evaluate_access, require_write_permission
from ...users.entities import User
from ..entities import (
    AuditAction,
    AuditEntry,
    Checksum,
    Document,
    DocumentVersion,
    VersionData,
)
from ..exceptions import ChecksumMismatchError, DuplicateDocumentError
from .base import DocumentWorkflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitiateUploadCommand:
    filename: str
    original_name: str
    mime_type: str
    size: int
    checksum: Union[Checksum, str]
    uploaded_by: UserId
    document_id: Optional[DocumentId] = None


@dataclass(frozen=True)
class InitiateUploadResult:
    """Reserved version plus where to send the bytes.

    ``upload_url`` is None when ``reused`` points at a version whose bytes
    are already stored.
    """
    document: Document
    version: DocumentVersion
    upload_url: Optional[str] = None
    upload_path: Optional[str] = None
    expires_at: Optional[datetime] = None
    reused: bool = False


@dataclass(frozen=True)
class ConfirmUploadCommand:
    document_id: DocumentId
    user_id: UserId
    checksum: Union[Checksum, str]
    storage_path: str
    version_id: Optional[DocumentVersionId] = None


def _checksum(value: Union[Checksum, str]) -> Checksum:
    return value if isinstance(value, Checksum) else Checksum(value)


class UploadService(DocumentWorkflow):
    """Service orchestrating two-phase uploads and DRAFT/PUBLISHED transitions."""

    async def _reuse_existing(
        self,
        user: User,
        document: Document,
        checksum: Checksum
    ) -> InitiateUploadResult:
        """Answer a repeated initiate for content that is already registered."""
        permissions = await self._permissions(document.id)
        if not evaluate_access(user, document, permissions, PermissionType.READ):
            # Content exists in a document this user cannot see
            raise DuplicateDocumentError(checksum=checksum.value)

        version = next(v for v in document.versions if v.checksum == checksum)
        if version.is_confirmed:
            return InitiateUploadResult(document=document, version=version, reused=True)

        presigned = await self.storage.generate_presigned_upload_url(
            version.filename.value, version.mime_type.value, document.id, version.id
        )
        return InitiateUploadResult(
            document=document,
            version=version,
            upload_url=presigned.url,
            upload_path=presigned.upload_path,
            expires_at=presigned.expires_at,
            reused=True,
        )

    async def initiate_upload(self, command: InitiateUploadCommand) -> InitiateUploadResult:
        """Reserve a version for content identified by its checksum.

        Repeating the call with the same checksum returns the existing
        reservation instead of creating another one.
        """
        user = await self._load_user(command.uploaded_by)
        self._check_size(command.size)
        checksum = _checksum(command.checksum)

        existing = await self.document_repository.find_by_checksum(checksum)
        if existing is not None:
            logger.info(f"Initiate for known checksum {checksum.value[:12]} reuses document {existing.id}")
            return await self._reuse_existing(user, existing, checksum)

        if command.document_id is not None:
            document = await self._load_document(command.document_id)
            require_write_permission(user, document, await self._permissions(document.id))
        else:
            document = Document.create(
                filename=command.filename,
                original_name=command.original_name,
                mime_type=command.mime_type,
                size=command.size,
                uploaded_by=user.id,
            )

        version_id = DocumentVersionId.generate()
        updated = document.add_version(
            VersionData(
                filename=command.filename,
                original_name=command.original_name,
                mime_type=command.mime_type,
                size=command.size,
                uploaded_by=user.id,
                checksum=checksum,
                version_id=version_id,
            )
        )
        version = updated.get_version(version_id)

        presigned = await self.storage.generate_presigned_upload_url(
            version.filename.value, version.mime_type.value, updated.id, version_id
        )
        saved = await self.document_repository.save(
            updated,
            audit=AuditEntry(
                document_id=updated.id,
                action=AuditAction.UPLOAD_INITIATED,
                performed_by=user.id,
                details=f"Version {version.version_number} upload initiated",
            )
        )

        logger.info(f"Initiated upload of version {version.version_number} for document {saved.id}")
        return InitiateUploadResult(
            document=saved,
            version=version,
            upload_url=presigned.url,
            upload_path=presigned.upload_path,
            expires_at=presigned.expires_at,
        )

    def _pending_version(self, document: Document, version_id: Optional[DocumentVersionId]) -> DocumentVersion:
        if version_id is not None:
            version = document.get_version(version_id)
            if version is None:
                raise NotFoundError("DocumentVersion", version_id)
            return version

        pending = [v for v in document.versions if not v.is_confirmed]
        if not pending:
            raise NotFoundError(
                "DocumentVersion",
                document.id,
                message=f"Document {document.id} has no upload awaiting confirmation"
            )
        return max(pending, key=lambda v: v.version_number.value)

    async def confirm_upload(self, command: ConfirmUploadCommand) -> Document:
        """Verify the uploaded bytes and record their storage location.

        Raises:
            ChecksumMismatchError: reported or actual checksum differs from the declared one
            NotFoundError: unknown document, version or uploaded file
            InsufficientPermissionError: caller is neither the uploader nor a WRITE holder
        """
        document = await self._load_document(command.document_id)
        user = await self._load_user(command.user_id)
        version = self._pending_version(document, command.version_id)

        if version.uploaded_by != user.id:
            require_write_permission(user, document, await self._permissions(document.id))

        reported = _checksum(command.checksum)
        if version.checksum is not None and not version.checksum.matches(reported):
            raise ChecksumMismatchError(
                version_id=version.id, expected=version.checksum.value, actual=reported.value
            )

        if version.is_confirmed:
            # Retried confirm for a version that already landed
            return document

        metadata = await self.storage.get_file_metadata(command.storage_path)
        if metadata is None:
            raise NotFoundError("File", command.storage_path)
        if metadata.size != version.size.value:
            raise ValidationError(
                f"Uploaded file is {metadata.size} bytes, expected {version.size.value}",
                field="size",
                value=metadata.size
            )

        stored = await self.storage.move_to_storage(command.storage_path, version.filename.value)
        try:
            updated = document.confirm_version(
                version.id, stored.path, stored.content_ref, stored.checksum
            )
            saved = await self.document_repository.save(
                updated,
                audit=AuditEntry(
                    document_id=document.id,
                    action=AuditAction.UPLOAD_CONFIRMED,
                    performed_by=user.id,
                    details=f"Version {version.version_number} confirmed at {stored.path}",
                )
            )
        except DocVaultError:
            await self.storage.delete_file(stored.path)
            raise

        logger.info(f"Confirmed version {version.version_number} of document {document.id}")
        return saved

    async def _transition(self, document_id: DocumentId, user_id: UserId, publish: bool) -> Document:
        document = await self._load_document(document_id)
        user = await self._load_user(user_id)
        require_write_permission(user, document, await self._permissions(document_id))

        updated = document.publish() if publish else document.unpublish()
        if updated is document:
            return document

        action = AuditAction.PUBLISHED if publish else AuditAction.UNPUBLISHED
        saved = await self.document_repository.save(
            updated,
            audit=AuditEntry(document_id=document_id, action=action, performed_by=user.id)
        )
        logger.info(f"Document {document_id} {action.value} by {user_id}")
        return saved

    async def publish_document(self, document_id: DocumentId, user_id: UserId) -> Document:
        """DRAFT -> PUBLISHED. Requires WRITE; publishing twice is a no-op."""
        return await self._transition(document_id, user_id, publish=True)

    async def unpublish_document(self, document_id: DocumentId, user_id: UserId) -> Document:
        """PUBLISHED -> DRAFT. Requires WRITE; unpublishing a draft is a no-op."""
        return await self._transition(document_id, user_id, publish=False)
