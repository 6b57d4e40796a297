"""Shared loading helpers for document workflows."""

from typing import List, Optional

from ....config import DocVaultSettings, get_settings
from ....core.exceptions import NotFoundError, ValidationError
from ....core.value_objects import DocumentId, UserId
from ...permissions.entities import DocumentPermission, PermissionRepository
from ...users.entities import User, UserRepository
from ..entities import Document, DocumentRepository, FileSize, StoragePort


class DocumentWorkflow:
    """Base class wiring the ports every document workflow needs."""

    def __init__(
        self,
        document_repository: DocumentRepository,
        permission_repository: PermissionRepository,
        user_repository: UserRepository,
        storage: StoragePort,
        settings: Optional[DocVaultSettings] = None
    ):
        self.document_repository = document_repository
        self.permission_repository = permission_repository
        self.user_repository = user_repository
        self.storage = storage
        self.settings = settings or get_settings()

    async def _load_document(self, document_id: DocumentId) -> Document:
        document = await self.document_repository.find_by_id(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    async def _load_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def _permissions(self, document_id: DocumentId) -> List[DocumentPermission]:
        return await self.permission_repository.find_by_document(document_id)

    def _check_size(self, size: int) -> FileSize:
        """Validate ``size`` against the hard limit and the configured one."""
        file_size = FileSize(size)
        if file_size.exceeds(self.settings.max_file_size):
            raise ValidationError(
                f"File size {size} exceeds the configured limit of {self.settings.max_file_size} bytes",
                field="size",
                value=size
            )
        return file_size
