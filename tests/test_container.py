"""Tests for service wiring."""

import pytest

from docvault.config import DocVaultSettings
from docvault.container import create_container
from docvault.core.value_objects import UserId
from docvault.features.documents.services import InitiateUploadCommand
from docvault.features.permissions import PermissionType
from docvault.features.users import User
from docvault.storage import LocalFileStorage


class TestCreateContainer:
    @pytest.mark.asyncio
    async def test_in_memory_container_shares_repositories(self, tmp_path):
        settings = DocVaultSettings(_env_file=None, storage_root=str(tmp_path))
        container = await create_container(settings, in_memory=True)

        assert isinstance(container.storage, LocalFileStorage)
        assert container.database is None

        user = await container.users.save(User(id=UserId.generate(), email="someone@example.com"))
        result = await container.uploads.initiate_upload(
            InitiateUploadCommand("a.txt", "a.txt", "text/plain", 3, "c" * 64, user.id)
        )
        document = await container.documents.get_document(result.document.id, user.id)
        check = await container.permissions.check_permission(document.id, user.id, PermissionType.DELETE)

        assert check.has_permission
        await container.close()
