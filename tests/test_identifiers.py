"""Tests for identifier value objects and uuid helpers."""

from uuid import UUID

import pytest

from docvault.core.exceptions import ValidationError
from docvault.core.value_objects import DocumentId, UserId
from docvault.utils import generate_uuid_v7, is_valid_uuid


class TestIdentifiers:
    def test_generated_ids_are_uuid7(self):
        document_id = DocumentId.generate()
        assert isinstance(document_id.value, UUID)
        assert document_id.value.version == 7

    def test_string_is_coerced(self):
        raw = generate_uuid_v7()
        assert UserId.from_string(raw) == UserId(UUID(raw))
        assert str(UserId(raw)) == raw

    def test_rejects_garbage(self):
        with pytest.raises(ValidationError):
            DocumentId("not-a-uuid")

    def test_is_valid_uuid(self):
        assert is_valid_uuid(generate_uuid_v7())
        assert not is_valid_uuid("nope")
