"""End-to-end workflows across services sharing one set of repositories."""

import hashlib

import pytest

from docvault.features.documents import DocumentStatus, DuplicateDocumentError
from docvault.features.documents.services import (
    ConfirmUploadCommand,
    InitiateUploadCommand,
    UploadDocumentCommand,
)
from docvault.features.permissions import (
    GrantPermissionCommand,
    InsufficientPermissionError,
    PermissionType,
    require_permission,
)


def _upload(user_id, temp_path, document_id=None):
    return UploadDocumentCommand(
        temp_path=temp_path,
        filename="contract.pdf",
        original_name="Contract.pdf",
        mime_type="application/pdf",
        size=7,
        uploaded_by=user_id,
        document_id=document_id,
    )


class TestAccessWorkflow:
    @pytest.mark.asyncio
    async def test_grant_upgrade_and_admin_override(
        self, document_service, permission_service, permission_repository, storage, owner, stranger, admin
    ):
        storage.stage("tmp/1", b"content")
        document = await document_service.upload_document(_upload(owner.id, "tmp/1"))

        await permission_service.grant_permission(
            GrantPermissionCommand(document.id, stranger.id, PermissionType.READ, owner.id)
        )
        permissions = await permission_repository.find_by_document(document.id)
        with pytest.raises(InsufficientPermissionError):
            require_permission(stranger, document, permissions, PermissionType.WRITE)

        await permission_service.grant_permission(
            GrantPermissionCommand(document.id, stranger.id, PermissionType.WRITE, owner.id)
        )
        permissions = await permission_repository.find_by_document(document.id)
        require_permission(stranger, document, permissions, PermissionType.WRITE)

        check = await permission_service.check_permission(document.id, admin.id, PermissionType.DELETE)
        assert check.has_permission
        assert await permission_repository.find_by_user_and_document(admin.id, document.id) is None


class TestVersionWorkflow:
    @pytest.mark.asyncio
    async def test_duplicate_content_is_rejected_per_document(
        self, document_service, document_repository, storage, owner
    ):
        storage.stage("tmp/1", b"content", checksum="a" * 64)
        document = await document_service.upload_document(_upload(owner.id, "tmp/1"))
        assert document.get_latest_version().version_number.value == 1

        storage.stage("tmp/2", b"content", checksum="a" * 64)
        with pytest.raises(DuplicateDocumentError):
            await document_service.upload_document(_upload(owner.id, "tmp/2", document.id))
        assert (await document_repository.find_by_id(document.id)).version_count == 1

        storage.stage("tmp/3", b"changed", checksum="b" * 64)
        updated = await document_service.upload_document(_upload(owner.id, "tmp/3", document.id))
        assert updated.version_count == 2
        assert updated.get_latest_version().version_number.value == 2
        assert updated.get_latest_version().checksum.value == "b" * 64


class TestTwoPhaseWorkflow:
    @pytest.mark.asyncio
    async def test_initiate_confirm_publish_download(self, upload_service, document_service, storage, owner):
        content = b"signed agreement"
        checksum = hashlib.sha256(content).hexdigest()
        reservation = await upload_service.initiate_upload(
            InitiateUploadCommand("agreement.pdf", "Agreement.pdf", "application/pdf", len(content), checksum, owner.id)
        )
        storage.stage(reservation.upload_path, content)

        await upload_service.confirm_upload(
            ConfirmUploadCommand(reservation.document.id, owner.id, checksum, reservation.upload_path)
        )
        published = await upload_service.publish_document(reservation.document.id, owner.id)
        url = await document_service.get_download_url(reservation.document.id, owner.id)

        assert published.status is DocumentStatus.PUBLISHED
        assert url.startswith("https://downloads.test/objects/")
