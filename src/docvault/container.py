"""Service wiring for applications embedding docvault.

``create_container`` builds every service over either PostgreSQL (asyncpg)
or the in-memory repositories, with local filesystem storage.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import DocVaultSettings, get_settings
from .database import DatabaseManager
from .features.documents import AsyncPGDocumentRepository, InMemoryDocumentRepository, StoragePort
from .features.documents.services import DocumentService, UploadService
from .features.permissions import AsyncPGPermissionRepository, InMemoryPermissionRepository, PermissionService
from .features.users import AsyncPGUserRepository, InMemoryUserRepository, UserRepository
from .storage import LocalFileStorage

logger = logging.getLogger(__name__)


@dataclass
class DocVaultContainer:
    """Wired services plus the resources they share."""

    settings: DocVaultSettings
    documents: DocumentService
    uploads: UploadService
    permissions: PermissionService
    users: UserRepository
    storage: StoragePort
    database: Optional[DatabaseManager] = None

    async def close(self) -> None:
        if self.database is not None:
            await self.database.close_pool()


async def create_container(
    settings: Optional[DocVaultSettings] = None,
    in_memory: bool = False,
    storage: Optional[StoragePort] = None
) -> DocVaultContainer:
    """Build services over PostgreSQL, or over in-memory repositories when ``in_memory``."""
    settings = settings or get_settings()
    storage = storage or LocalFileStorage(
        root=settings.storage_root,
        base_url=settings.upload_base_url,
        upload_ttl_seconds=settings.presigned_url_ttl_seconds,
    )

    database = None
    if in_memory:
        document_repository = InMemoryDocumentRepository()
        permission_repository = InMemoryPermissionRepository()
        user_repository = InMemoryUserRepository()
    else:
        database = DatabaseManager(settings=settings)
        await database.create_pool()
        document_repository = AsyncPGDocumentRepository(database, settings.db_schema)
        permission_repository = AsyncPGPermissionRepository(database, settings.db_schema)
        user_repository = AsyncPGUserRepository(database, settings.db_schema)

    ports = dict(
        document_repository=document_repository,
        permission_repository=permission_repository,
        user_repository=user_repository,
        storage=storage,
        settings=settings,
    )
    logger.info(f"docvault services ready ({'in-memory' if in_memory else 'postgresql'})")
    return DocVaultContainer(
        settings=settings,
        documents=DocumentService(**ports),
        uploads=UploadService(**ports),
        permissions=PermissionService(permission_repository, document_repository, user_repository),
        users=user_repository,
        storage=storage,
        database=database,
    )
