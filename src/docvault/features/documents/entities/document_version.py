"""Document version entity.

One immutable revision of a document's content. ``document_id`` is a
lookup key back to the owning aggregate, never an ownership reference.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from ....core.exceptions import ValidationError
from ....core.value_objects import DocumentId, DocumentVersionId, UserId
from ....utils import utc_now
from ..exceptions import ChecksumMismatchError
from .checksum import Checksum
from .content_ref import ContentRef
from .file_size import FileSize
from .filename import Filename
from .mime_type import MimeType
from .version_number import VersionNumber


@dataclass(frozen=True)
class DocumentVersion:
    """A single version of a document.

    ``path``, ``content_ref`` and ``checksum`` stay empty until the bytes
    are confirmed in storage; everything else is fixed at creation.
    """

    id: DocumentVersionId
    document_id: DocumentId
    filename: Filename
    original_name: Filename
    mime_type: MimeType
    size: FileSize
    version_number: VersionNumber
    uploaded_by: UserId
    created_at: datetime = field(default_factory=utc_now)
    path: Optional[str] = None
    content_ref: Optional[ContentRef] = None
    checksum: Optional[Checksum] = None

    @property
    def is_confirmed(self) -> bool:
        """Whether the bytes for this version have landed in storage."""
        return self.path is not None

    def confirm_upload(
        self,
        path: str,
        content_ref: Optional[ContentRef] = None,
        checksum: Optional[Checksum] = None
    ) -> 'DocumentVersion':
        """Return a copy with its storage location filled in.

        A checksum declared earlier must match the confirmed one.
        """
        if not path:
            raise ValidationError("Storage path is required to confirm an upload", field="path")

        if self.checksum is not None and checksum is not None and not self.checksum.matches(checksum):
            raise ChecksumMismatchError(
                version_id=self.id,
                expected=self.checksum.value,
                actual=checksum.value
            )

        return replace(
            self,
            path=path,
            content_ref=content_ref or self.content_ref,
            checksum=checksum or self.checksum
        )
