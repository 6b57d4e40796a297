"""Pytest configuration and fixtures for docvault tests."""

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from docvault.config import DocVaultSettings
from docvault.core.exceptions import NotFoundError
from docvault.core.value_objects import UserId
from docvault.features.documents import (
    Document,
    InMemoryDocumentRepository,
    PresignedUpload,
    StoredFile,
    StoredFileMetadata,
    VersionData,
)
from docvault.features.documents.services import DocumentService, UploadService
from docvault.features.permissions import InMemoryPermissionRepository, PermissionService
from docvault.features.users import InMemoryUserRepository, User, UserRole


class FakeStorage:
    """In-memory StoragePort.

    ``stage`` puts bytes where a client would upload them; an explicit
    checksum overrides the SHA-256 reported for those bytes.
    """

    def __init__(self):
        self.staged: Dict[str, bytes] = {}
        self.stored: Dict[str, bytes] = {}
        self.checksums: Dict[str, str] = {}
        self.deleted = []
        self._counter = 0

    def stage(self, path: str, content: bytes = b"content", checksum: Optional[str] = None) -> str:
        self.staged[path] = content
        self.checksums[path] = checksum or hashlib.sha256(content).hexdigest()
        return path

    async def generate_presigned_upload_url(self, filename, mime_type, document_id, version_id):
        path = f"tmp/{document_id}/{version_id}/{filename}"
        return PresignedUpload(
            url=f"https://uploads.test/{path}?token=t",
            upload_path=path,
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )

    async def move_to_storage(self, temp_path, filename):
        if temp_path not in self.staged:
            raise NotFoundError("File", temp_path)
        self._counter += 1
        content = self.staged.pop(temp_path)
        path = f"objects/{self._counter}/{filename}"
        self.stored[path] = content
        return StoredFile(
            path=path,
            content_ref=f"ref-{self._counter}",
            size=len(content),
            checksum=self.checksums.pop(temp_path),
        )

    async def delete_file(self, path):
        self.deleted.append(path)
        self.stored.pop(path, None)

    async def get_download_url(self, path, ttl_seconds):
        return f"https://downloads.test/{path}?ttl={ttl_seconds}"

    async def file_exists(self, path):
        return path in self.staged or path in self.stored

    async def get_file_metadata(self, path):
        content = self.staged.get(path, self.stored.get(path))
        if content is None:
            return None
        return StoredFileMetadata(
            size=len(content),
            last_modified=datetime.now(timezone.utc),
            content_type="application/octet-stream",
        )


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return DocVaultSettings(_env_file=None)


@pytest.fixture
def owner():
    return User(id=UserId.generate(), email="owner@example.com", role=UserRole.USER)


@pytest.fixture
def admin():
    return User(id=UserId.generate(), email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def stranger():
    return User(id=UserId.generate(), email="stranger@example.com", role=UserRole.USER)


@pytest.fixture
def sample_document(owner):
    """Document owned by ``owner`` with no versions."""
    return Document.create(
        filename="report.pdf",
        original_name="Quarterly Report.pdf",
        mime_type="application/pdf",
        size=2048,
        uploaded_by=owner.id,
    )


@pytest.fixture
def version_data(owner):
    """Factory for VersionData with an optional checksum."""
    def _make(checksum: Optional[str] = None, uploaded_by: Optional[UserId] = None) -> VersionData:
        return VersionData(
            filename="report.pdf",
            original_name="Quarterly Report.pdf",
            mime_type="application/pdf",
            size=2048,
            uploaded_by=uploaded_by or owner.id,
            checksum=checksum,
        )
    return _make


@pytest.fixture
def document_repository():
    return InMemoryDocumentRepository()


@pytest.fixture
def permission_repository():
    return InMemoryPermissionRepository()


@pytest_asyncio.fixture
async def user_repository(owner, admin, stranger):
    repository = InMemoryUserRepository()
    for user in (owner, admin, stranger):
        await repository.save(user)
    return repository


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def mock_storage():
    """StoragePort double for asserting calls."""
    return AsyncMock()


@pytest.fixture
def document_service(document_repository, permission_repository, user_repository, storage, settings):
    return DocumentService(document_repository, permission_repository, user_repository, storage, settings)


@pytest.fixture
def upload_service(document_repository, permission_repository, user_repository, storage, settings):
    return UploadService(document_repository, permission_repository, user_repository, storage, settings)


@pytest.fixture
def permission_service(permission_repository, document_repository, user_repository):
    return PermissionService(permission_repository, document_repository, user_repository)
