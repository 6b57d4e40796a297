"""Tests for UploadService: two-phase upload and publication."""

import hashlib

import pytest

from docvault.core.exceptions import NotFoundError, ValidationError
from docvault.features.documents import (
    AuditAction,
    ChecksumMismatchError,
    DocumentStatus,
    DuplicateDocumentError,
)
from docvault.features.documents.services import ConfirmUploadCommand, InitiateUploadCommand
from docvault.features.permissions import (
    DocumentPermission,
    InsufficientPermissionError,
    PermissionType,
)

CONTENT = b"quarterly numbers"
CHECKSUM = hashlib.sha256(CONTENT).hexdigest()


def _initiate(user_id, checksum=CHECKSUM, size=len(CONTENT), document_id=None):
    return InitiateUploadCommand(
        filename="report.pdf",
        original_name="Quarterly Report.pdf",
        mime_type="application/pdf",
        size=size,
        checksum=checksum,
        uploaded_by=user_id,
        document_id=document_id,
    )


def _confirm(result, user_id, checksum=CHECKSUM):
    return ConfirmUploadCommand(
        document_id=result.document.id,
        user_id=user_id,
        checksum=checksum,
        storage_path=result.upload_path,
        version_id=result.version.id,
    )


class TestInitiateUpload:
    @pytest.mark.asyncio
    async def test_reserves_draft_version(self, upload_service, document_repository, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))

        assert not result.reused
        assert result.upload_url.startswith("https://uploads.test/")
        assert result.expires_at is not None
        assert result.document.status is DocumentStatus.DRAFT
        assert result.version.checksum.value == CHECKSUM
        assert result.version.version_number.value == 1
        assert not result.version.is_confirmed

        stored = await document_repository.find_by_id(result.document.id)
        assert stored.version_count == 1
        audit = await document_repository.list_audit(result.document.id)
        assert [entry.action for entry in audit] == [AuditAction.UPLOAD_INITIATED]

    @pytest.mark.asyncio
    async def test_repeated_initiate_is_idempotent(self, upload_service, document_repository, owner):
        first = await upload_service.initiate_upload(_initiate(owner.id))
        second = await upload_service.initiate_upload(_initiate(owner.id))

        assert second.reused
        assert second.document.id == first.document.id
        assert second.version.id == first.version.id
        assert second.upload_url is not None
        assert (await document_repository.find_by_id(first.document.id)).version_count == 1

    @pytest.mark.asyncio
    async def test_reuse_of_confirmed_content_needs_no_upload(self, upload_service, storage, owner):
        first = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(first.upload_path, CONTENT)
        await upload_service.confirm_upload(_confirm(first, owner.id))

        again = await upload_service.initiate_upload(_initiate(owner.id))

        assert again.reused
        assert again.upload_url is None
        assert again.version.is_confirmed

    @pytest.mark.asyncio
    async def test_content_hidden_from_other_users(self, upload_service, owner, stranger):
        await upload_service.initiate_upload(_initiate(owner.id))

        with pytest.raises(DuplicateDocumentError):
            await upload_service.initiate_upload(_initiate(stranger.id))

    @pytest.mark.asyncio
    async def test_new_version_of_existing_document(self, upload_service, owner):
        first = await upload_service.initiate_upload(_initiate(owner.id))
        second = await upload_service.initiate_upload(
            _initiate(owner.id, checksum="b" * 64, document_id=first.document.id)
        )

        assert not second.reused
        assert second.document.id == first.document.id
        assert second.version.version_number.value == 2

    @pytest.mark.asyncio
    async def test_new_version_requires_write(self, upload_service, owner, stranger):
        first = await upload_service.initiate_upload(_initiate(owner.id))

        with pytest.raises(InsufficientPermissionError):
            await upload_service.initiate_upload(
                _initiate(stranger.id, checksum="b" * 64, document_id=first.document.id)
            )

    @pytest.mark.asyncio
    async def test_rejects_invalid_checksum(self, upload_service, owner):
        with pytest.raises(ValidationError):
            await upload_service.initiate_upload(_initiate(owner.id, checksum="not-a-digest"))


class TestConfirmUpload:
    @pytest.mark.asyncio
    async def test_confirms_pending_version(self, upload_service, document_repository, storage, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT)

        document = await upload_service.confirm_upload(_confirm(result, owner.id))

        version = document.get_version(result.version.id)
        assert version.is_confirmed
        assert version.path in storage.stored
        assert version.content_ref is not None
        assert version.checksum.value == CHECKSUM

        audit = await document_repository.list_audit(document.id)
        assert audit[-1].action is AuditAction.UPLOAD_CONFIRMED

    @pytest.mark.asyncio
    async def test_picks_latest_pending_version_without_id(self, upload_service, storage, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT)

        document = await upload_service.confirm_upload(
            ConfirmUploadCommand(
                document_id=result.document.id,
                user_id=owner.id,
                checksum=CHECKSUM,
                storage_path=result.upload_path,
            )
        )

        assert document.get_version(result.version.id).is_confirmed

    @pytest.mark.asyncio
    async def test_reported_checksum_mismatch(self, upload_service, storage, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT)

        with pytest.raises(ChecksumMismatchError):
            await upload_service.confirm_upload(_confirm(result, owner.id, checksum="f" * 64))

        assert result.upload_path in storage.staged

    @pytest.mark.asyncio
    async def test_landed_bytes_mismatch(self, upload_service, document_repository, storage, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT.upper())

        with pytest.raises(ChecksumMismatchError):
            await upload_service.confirm_upload(_confirm(result, owner.id))

        assert len(storage.deleted) == 1
        stored = await document_repository.find_by_id(result.document.id)
        assert not stored.get_version(result.version.id).is_confirmed

    @pytest.mark.asyncio
    async def test_size_mismatch(self, upload_service, storage, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT + b"!")

        with pytest.raises(ValidationError):
            await upload_service.confirm_upload(_confirm(result, owner.id))

    @pytest.mark.asyncio
    async def test_missing_upload(self, upload_service, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))

        with pytest.raises(NotFoundError) as exc_info:
            await upload_service.confirm_upload(_confirm(result, owner.id))
        assert exc_info.value.entity_type == "File"

    @pytest.mark.asyncio
    async def test_retried_confirm_returns_document(self, upload_service, storage, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT)
        confirmed = await upload_service.confirm_upload(_confirm(result, owner.id))

        again = await upload_service.confirm_upload(_confirm(result, owner.id))

        assert again == confirmed
        assert len(storage.stored) == 1

    @pytest.mark.asyncio
    async def test_other_user_needs_write(self, upload_service, permission_repository, storage, owner, stranger):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        storage.stage(result.upload_path, CONTENT)

        with pytest.raises(InsufficientPermissionError):
            await upload_service.confirm_upload(_confirm(result, stranger.id))

        await permission_repository.save(
            DocumentPermission.create(result.document.id, stranger.id, PermissionType.WRITE, owner.id)
        )
        document = await upload_service.confirm_upload(_confirm(result, stranger.id))
        assert document.get_version(result.version.id).is_confirmed


class TestPublication:
    @pytest.mark.asyncio
    async def test_publish_and_unpublish(self, upload_service, document_repository, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))

        published = await upload_service.publish_document(result.document.id, owner.id)
        assert published.status is DocumentStatus.PUBLISHED

        draft = await upload_service.unpublish_document(result.document.id, owner.id)
        assert draft.status is DocumentStatus.DRAFT

        actions = [entry.action for entry in await document_repository.list_audit(result.document.id)]
        assert actions == [AuditAction.UPLOAD_INITIATED, AuditAction.PUBLISHED, AuditAction.UNPUBLISHED]

    @pytest.mark.asyncio
    async def test_repeated_publish_is_a_no_op(self, upload_service, document_repository, owner):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        await upload_service.publish_document(result.document.id, owner.id)

        again = await upload_service.publish_document(result.document.id, owner.id)

        assert again.status is DocumentStatus.PUBLISHED
        audit = await document_repository.list_audit(result.document.id)
        assert len(audit) == 2

    @pytest.mark.asyncio
    async def test_publish_requires_write(self, upload_service, permission_repository, owner, stranger):
        result = await upload_service.initiate_upload(_initiate(owner.id))
        await permission_repository.save(
            DocumentPermission.create(result.document.id, stranger.id, PermissionType.READ, owner.id)
        )

        with pytest.raises(InsufficientPermissionError):
            await upload_service.publish_document(result.document.id, stranger.id)
