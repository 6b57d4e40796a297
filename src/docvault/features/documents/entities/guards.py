"""Duplicate-content guard.

Dedup is scoped to one document's own history. Versions still waiting
for upload confirmation carry no checksum and can never collide.
"""

from typing import Iterable, Optional

from ..exceptions import DuplicateDocumentError
from .checksum import Checksum
from .document_version import DocumentVersion


def find_duplicate_version(
    existing_versions: Iterable[DocumentVersion],
    new_checksum: Checksum
) -> Optional[DocumentVersion]:
    """Return the first version whose checksum equals ``new_checksum``."""
    for version in existing_versions:
        if version.checksum is None:
            continue
        if version.checksum == new_checksum:
            return version
    return None


def validate_no_duplicate_content(
    existing_versions: Iterable[DocumentVersion],
    new_checksum: Optional[Checksum]
) -> None:
    """Raise DuplicateDocumentError if ``new_checksum`` is already in the history.

    A missing ``new_checksum`` always passes.
    """
    if new_checksum is None:
        return
    duplicate = find_duplicate_version(existing_versions, new_checksum)
    if duplicate is not None:
        raise DuplicateDocumentError(
            checksum=new_checksum.value,
            document_id=str(duplicate.document_id)
        )
