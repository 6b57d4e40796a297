"""Tests for PermissionService."""

import pytest
import pytest_asyncio

from docvault.core.exceptions import ForbiddenError, NotFoundError
from docvault.core.value_objects import PermissionId, UserId
from docvault.features.documents import AuditAction
from docvault.features.permissions import (
    CannotRevokeOwnerPermissionError,
    DocumentPermission,
    GrantPermissionCommand,
    PermissionType,
    RevokePermissionCommand,
    UpdatePermissionCommand,
)


@pytest_asyncio.fixture
async def document(document_repository, sample_document):
    return await document_repository.save(sample_document)


def _grant(document, user_id, permission, granted_by):
    return GrantPermissionCommand(
        document_id=document.id, user_id=user_id, permission=permission, granted_by=granted_by
    )


class TestGrantPermission:
    @pytest.mark.asyncio
    async def test_owner_grants(self, permission_service, document_repository, document, owner, stranger):
        permission = await permission_service.grant_permission(
            _grant(document, stranger.id, PermissionType.READ, owner.id)
        )

        assert permission.user_id == stranger.id
        assert permission.permission is PermissionType.READ
        assert permission.granted_by == owner.id

        audit = await document_repository.list_audit(document.id)
        assert audit[-1].action is AuditAction.PERMISSION_GRANTED

    @pytest.mark.asyncio
    async def test_regrant_upserts(self, permission_service, permission_repository, document, owner, admin, stranger):
        first = await permission_service.grant_permission(
            _grant(document, stranger.id, PermissionType.READ, owner.id)
        )
        second = await permission_service.grant_permission(
            _grant(document, stranger.id, PermissionType.WRITE, admin.id)
        )

        assert second.id == first.id
        assert second.permission is PermissionType.WRITE
        assert second.granted_by == owner.id
        assert second.granted_at == first.granted_at
        assert len(await permission_repository.find_by_document(document.id)) == 1

    @pytest.mark.asyncio
    async def test_grantee_cannot_grant(self, permission_service, permission_repository, document, owner, admin, stranger):
        await permission_repository.save(
            DocumentPermission.create(document.id, stranger.id, PermissionType.DELETE, owner.id)
        )

        with pytest.raises(ForbiddenError):
            await permission_service.grant_permission(
                _grant(document, admin.id, PermissionType.READ, stranger.id)
            )

    @pytest.mark.asyncio
    async def test_unknown_grantee(self, permission_service, document, owner):
        with pytest.raises(NotFoundError) as exc_info:
            await permission_service.grant_permission(
                _grant(document, UserId.generate(), PermissionType.READ, owner.id)
            )
        assert exc_info.value.entity_type == "User"


class TestUpdatePermission:
    @pytest.mark.asyncio
    async def test_changes_level_only(self, permission_service, document, owner, stranger):
        granted = await permission_service.grant_permission(
            _grant(document, stranger.id, PermissionType.READ, owner.id)
        )

        updated = await permission_service.update_permission(
            UpdatePermissionCommand(permission_id=granted.id, permission=PermissionType.DELETE, updated_by=owner.id)
        )

        assert updated.permission is PermissionType.DELETE
        assert updated.id == granted.id
        assert updated.granted_at == granted.granted_at

    @pytest.mark.asyncio
    async def test_unknown_permission(self, permission_service, owner):
        with pytest.raises(NotFoundError) as exc_info:
            await permission_service.update_permission(
                UpdatePermissionCommand(
                    permission_id=PermissionId.generate(), permission=PermissionType.READ, updated_by=owner.id
                )
            )
        assert exc_info.value.entity_type == "Permission"


class TestRevokePermission:
    @pytest.mark.asyncio
    async def test_revokes(self, permission_service, permission_repository, document, owner, stranger):
        granted = await permission_service.grant_permission(
            _grant(document, stranger.id, PermissionType.READ, owner.id)
        )

        await permission_service.revoke_permission(
            RevokePermissionCommand(permission_id=granted.id, revoked_by=owner.id)
        )

        assert await permission_repository.find_by_id(granted.id) is None

    @pytest.mark.asyncio
    async def test_owner_grant_cannot_be_revoked(self, permission_service, permission_repository, document, owner, admin):
        owner_grant = await permission_repository.save(
            DocumentPermission.create(document.id, owner.id, PermissionType.DELETE, owner.id)
        )

        with pytest.raises(CannotRevokeOwnerPermissionError):
            await permission_service.revoke_permission(
                RevokePermissionCommand(permission_id=owner_grant.id, revoked_by=admin.id)
            )

        assert await permission_repository.find_by_id(owner_grant.id) is not None

    @pytest.mark.asyncio
    async def test_grantee_cannot_revoke(self, permission_service, document, owner, stranger):
        granted = await permission_service.grant_permission(
            _grant(document, stranger.id, PermissionType.DELETE, owner.id)
        )

        with pytest.raises(ForbiddenError):
            await permission_service.revoke_permission(
                RevokePermissionCommand(permission_id=granted.id, revoked_by=stranger.id)
            )


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_document_permissions_is_manager_only(self, permission_service, document, owner, stranger):
        await permission_service.grant_permission(_grant(document, stranger.id, PermissionType.READ, owner.id))

        permissions = await permission_service.list_document_permissions(document.id, owner.id)
        assert [p.user_id for p in permissions] == [stranger.id]

        with pytest.raises(ForbiddenError):
            await permission_service.list_document_permissions(document.id, stranger.id)

    @pytest.mark.asyncio
    async def test_list_user_permissions(self, permission_service, document, owner, stranger):
        await permission_service.grant_permission(_grant(document, stranger.id, PermissionType.WRITE, owner.id))

        permissions = await permission_service.list_user_permissions(stranger.id)

        assert [(p.document_id, p.permission) for p in permissions] == [(document.id, PermissionType.WRITE)]

    @pytest.mark.asyncio
    async def test_check_permission(self, permission_service, document, owner, stranger):
        await permission_service.grant_permission(_grant(document, stranger.id, PermissionType.WRITE, owner.id))

        write = await permission_service.check_permission(document.id, stranger.id, PermissionType.WRITE)
        delete = await permission_service.check_permission(document.id, stranger.id, PermissionType.DELETE)
        owner_check = await permission_service.check_permission(document.id, owner.id, PermissionType.DELETE)

        assert write.has_permission and write.permission is PermissionType.WRITE
        assert not delete.has_permission and delete.permission is PermissionType.WRITE
        assert owner_check.has_permission and owner_check.permission is PermissionType.DELETE
