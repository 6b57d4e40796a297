"""Tests for InMemoryDocumentRepository."""

from dataclasses import replace

import pytest

from docvault.core.exceptions import ConstraintError
from docvault.core.value_objects import DocumentId
from docvault.features.documents import AuditAction, AuditEntry, Checksum, ContentRef, Document
from docvault.features.pagination import PaginationParams


class TestSave:
    @pytest.mark.asyncio
    async def test_round_trip(self, document_repository, sample_document, version_data):
        document = sample_document.add_version(version_data("a" * 64))

        saved = await document_repository.save(document)

        assert saved == document
        assert await document_repository.find_by_id(document.id) == document
        assert await document_repository.find_by_id(DocumentId.generate()) is None

    @pytest.mark.asyncio
    async def test_save_records_audit(self, document_repository, sample_document, owner):
        audit = AuditEntry(document_id=sample_document.id, action=AuditAction.CREATED, performed_by=owner.id)

        await document_repository.save(sample_document, audit=audit)

        assert await document_repository.list_audit(sample_document.id) == [audit]

    @pytest.mark.asyncio
    async def test_concurrent_version_number_conflict(self, document_repository, sample_document, version_data):
        base = await document_repository.save(sample_document.add_version(version_data("a" * 64)))

        # Two writers extend the same snapshot
        first = base.add_version(version_data("b" * 64))
        second = base.add_version(version_data("c" * 64))
        await document_repository.save(first)

        with pytest.raises(ConstraintError) as exc_info:
            await document_repository.save(second)

        assert exc_info.value.details["constraint"] == "uq_document_versions_number"
        assert (await document_repository.find_by_id(base.id)).version_count == 2

    @pytest.mark.asyncio
    async def test_status_changes_persist(self, document_repository, sample_document):
        await document_repository.save(sample_document)
        await document_repository.save(sample_document.publish())

        stored = await document_repository.find_by_id(sample_document.id)
        assert stored.status.is_published


class TestLookups:
    @pytest.mark.asyncio
    async def test_find_by_checksum_and_content_ref(self, document_repository, sample_document, version_data):
        document = sample_document.add_version(version_data("a" * 64))
        version = document.versions[0]
        document = document.confirm_version(version.id, "objects/1/report.pdf", "ref-1")
        await document_repository.save(document)

        assert (await document_repository.find_by_checksum(Checksum("a" * 64))).id == document.id
        assert await document_repository.find_by_checksum(Checksum("b" * 64)) is None
        assert (await document_repository.find_by_content_ref(ContentRef("ref-1"))).id == document.id

    @pytest.mark.asyncio
    async def test_find_by_filename_and_user(self, document_repository, sample_document, owner, stranger):
        await document_repository.save(sample_document)

        found = await document_repository.find_by_filename_and_user("report.pdf", owner.id)
        assert found.id == sample_document.id
        assert await document_repository.find_by_filename_and_user("report.pdf", stranger.id) is None


class TestListing:
    @pytest.fixture
    def documents(self, owner):
        return [
            Document.create(f"file-{i}.txt", f"file-{i}.txt", "text/plain", 10, owner.id)
            for i in range(5)
        ]

    @pytest.mark.asyncio
    async def test_pages(self, document_repository, documents, owner, stranger):
        for document in documents:
            await document_repository.save(document)

        first = await document_repository.list_by_user(owner.id, PaginationParams(page=1, limit=2))
        last = await document_repository.list_by_user(owner.id, PaginationParams(page=3, limit=2))

        assert first.total == 5
        assert first.count == 2
        assert first.total_pages == 3
        assert last.count == 1
        assert not last.has_next_page

        seen = set()
        for page in range(1, 4):
            result = await document_repository.list_all(PaginationParams(page=page, limit=2))
            seen.update(d.id for d in result.items)
        assert seen == {d.id for d in documents}

        empty = await document_repository.list_by_user(stranger.id, PaginationParams())
        assert empty.total == 0

    @pytest.mark.asyncio
    async def test_search_matches_either_name(self, document_repository, owner):
        renamed = Document.create("a1b2.pdf", "Invoice March.pdf", "application/pdf", 10, owner.id)
        plain = Document.create("invoice-april.pdf", "invoice-april.pdf", "application/pdf", 10, owner.id)
        other = Document.create("notes.txt", "notes.txt", "text/plain", 10, owner.id)
        for document in (renamed, plain, other):
            await document_repository.save(document)

        result = await document_repository.search("invoice", PaginationParams())

        assert {d.id for d in result.items} == {renamed.id, plain.id}


class TestDeleteAndAudit:
    @pytest.mark.asyncio
    async def test_audit_outlives_document(self, document_repository, sample_document, owner):
        await document_repository.save(sample_document)
        await document_repository.add_audit(sample_document.id, AuditAction.DELETED, owner.id, "gone")

        assert await document_repository.delete(sample_document.id) is True
        assert await document_repository.delete(sample_document.id) is False

        audit = await document_repository.list_audit(sample_document.id)
        assert [(e.action, e.details) for e in audit] == [(AuditAction.DELETED, "gone")]

    @pytest.mark.asyncio
    async def test_delete_records_audit_only_when_removed(self, document_repository, sample_document, owner):
        await document_repository.save(sample_document)
        entry = AuditEntry(document_id=sample_document.id, action=AuditAction.DELETED, performed_by=owner.id)

        assert await document_repository.delete(sample_document.id, audit=entry) is True
        assert await document_repository.delete(sample_document.id, audit=entry) is False

        assert await document_repository.list_audit(sample_document.id) == [entry]

    @pytest.mark.asyncio
    async def test_merges_versions_from_stale_snapshot(self, document_repository, sample_document, version_data):
        stored = await document_repository.save(sample_document.add_version(version_data("a" * 64)))
        stale = replace(stored, versions=())

        merged = await document_repository.save(stale.publish())

        assert merged.version_count == 1
        assert merged.status.is_published
