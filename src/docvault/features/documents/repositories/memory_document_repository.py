"""In-memory document repository for tests and local runs.

Mirrors the database contract: saving merges versions by id, and a second
version with an existing (document_id, version_number) or
(document_id, checksum) is rejected with ConstraintError.
"""

import asyncio
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from ....core.exceptions import ConstraintError
from ....core.value_objects import DocumentId, UserId
from ...pagination.entities import PaginatedResult, PaginationParams
from ..entities import AuditAction, AuditEntry, Checksum, ContentRef, Document


class InMemoryDocumentRepository:
    """Dict-backed implementation of DocumentRepository protocol."""

    def __init__(self):
        self._documents: Dict[DocumentId, Document] = {}
        self._audit: List[AuditEntry] = []
        self._lock = asyncio.Lock()

    def _merge(self, stored: Optional[Document], document: Document) -> Document:
        if stored is None:
            return document

        stored_versions = {v.id: v for v in stored.versions}
        for version in document.versions:
            if version.id in stored_versions:
                continue
            for other in stored.versions:
                if other.version_number == version.version_number:
                    raise ConstraintError(
                        f"Version {version.version_number} of document {document.id} already exists",
                        constraint="uq_document_versions_number"
                    )
                if version.checksum is not None and other.checksum == version.checksum:
                    raise ConstraintError(
                        f"Checksum {version.checksum.value} already stored for document {document.id}",
                        constraint="uq_document_versions_checksum"
                    )

        merged = dict(stored_versions)
        merged.update({v.id: v for v in document.versions})
        return replace(document, versions=tuple(merged.values()))

    async def save(self, document: Document, audit: Optional[AuditEntry] = None) -> Document:
        async with self._lock:
            merged = self._merge(self._documents.get(document.id), document)
            self._documents[document.id] = merged
            if audit is not None:
                self._audit.append(audit)
            return merged

    async def find_by_id(self, document_id: DocumentId) -> Optional[Document]:
        return self._documents.get(document_id)

    def _find_first(self, predicate: Callable[[Document], bool]) -> Optional[Document]:
        for document in sorted(self._documents.values(), key=lambda d: d.created_at):
            if predicate(document):
                return document
        return None

    async def find_by_checksum(self, checksum: Checksum) -> Optional[Document]:
        return self._find_first(lambda d: any(v.checksum == checksum for v in d.versions))

    async def find_by_content_ref(self, content_ref: ContentRef) -> Optional[Document]:
        return self._find_first(lambda d: any(v.content_ref == content_ref for v in d.versions))

    async def find_by_filename_and_user(self, filename: str, user_id: UserId) -> Optional[Document]:
        name = str(filename).strip()
        matches = [
            d for d in self._documents.values()
            if d.filename.value == name and d.uploaded_by == user_id
        ]
        if not matches:
            return None
        return max(matches, key=lambda d: d.created_at)

    def _page(self, documents: List[Document], pagination: PaginationParams) -> PaginatedResult[Document]:
        ordered = sorted(documents, key=lambda d: (d.created_at, str(d.id)), reverse=True)
        items = ordered[pagination.offset:pagination.offset + pagination.limit]
        return PaginatedResult.from_params(items, len(ordered), pagination)

    async def list_by_user(self, user_id: UserId, pagination: PaginationParams) -> PaginatedResult[Document]:
        return self._page([d for d in self._documents.values() if d.uploaded_by == user_id], pagination)

    async def list_all(self, pagination: PaginationParams) -> PaginatedResult[Document]:
        return self._page(list(self._documents.values()), pagination)

    async def search(self, query: str, pagination: PaginationParams) -> PaginatedResult[Document]:
        needle = query.lower()
        return self._page(
            [
                d for d in self._documents.values()
                if needle in d.filename.value.lower() or needle in d.original_name.value.lower()
            ],
            pagination
        )

    async def delete(self, document_id: DocumentId, audit: Optional[AuditEntry] = None) -> bool:
        async with self._lock:
            deleted = self._documents.pop(document_id, None) is not None
            if deleted and audit is not None:
                self._audit.append(audit)
            return deleted

    async def add_audit(
        self,
        document_id: DocumentId,
        action: AuditAction,
        performed_by: UserId,
        details: Optional[str] = None
    ) -> AuditEntry:
        entry = AuditEntry(document_id=document_id, action=action, performed_by=performed_by, details=details)
        async with self._lock:
            self._audit.append(entry)
        return entry

    async def list_audit(self, document_id: DocumentId) -> List[AuditEntry]:
        return [entry for entry in self._audit if entry.document_id == document_id]
