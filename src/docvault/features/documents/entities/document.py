"""Document aggregate root.

A Document exclusively owns its ordered version history. The aggregate is
an immutable value: every operation returns a new Document and leaves the
input untouched.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple, Union

from ....core.exceptions import NotFoundError, ValidationError
from ....core.value_objects import DocumentId, DocumentVersionId, UserId
from ....utils import utc_now
from .checksum import Checksum
from .content_ref import ContentRef
from .document_status import DocumentStatus
from .document_version import DocumentVersion
from .file_size import FileSize
from .filename import Filename
from .guards import validate_no_duplicate_content
from .mime_type import MimeType
from .version_number import VersionNumber


def _filename(value: Union[Filename, str]) -> Filename:
    return value if isinstance(value, Filename) else Filename(value)


def _mime_type(value: Union[MimeType, str]) -> MimeType:
    return value if isinstance(value, MimeType) else MimeType(value)


def _file_size(value: Union[FileSize, int]) -> FileSize:
    return value if isinstance(value, FileSize) else FileSize(value)


def _checksum(value: Union[Checksum, str, None]) -> Optional[Checksum]:
    if value is None or isinstance(value, Checksum):
        return value
    return Checksum(value)


def _content_ref(value: Union[ContentRef, str, None]) -> Optional[ContentRef]:
    if value is None or isinstance(value, ContentRef):
        return value
    return ContentRef(value)


@dataclass(frozen=True)
class VersionData:
    """Caller-supplied properties for a new version.

    The version number is deliberately absent: the aggregate assigns it.
    """

    filename: Union[Filename, str]
    original_name: Union[Filename, str]
    mime_type: Union[MimeType, str]
    size: Union[FileSize, int]
    uploaded_by: UserId
    checksum: Union[Checksum, str, None] = None
    path: Optional[str] = None
    content_ref: Union[ContentRef, str, None] = None
    version_id: Optional[DocumentVersionId] = None


@dataclass(frozen=True)
class Document:
    """Document aggregate root.

    Invariants held on every construction:
    - versions are ordered by version number and numbered 1..n without gaps
    - every version points back at this document
    - no two versions share a checksum
    """

    id: DocumentId
    filename: Filename
    original_name: Filename
    mime_type: MimeType
    size: FileSize
    uploaded_by: UserId
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    status: DocumentStatus = DocumentStatus.DRAFT
    versions: Tuple[DocumentVersion, ...] = ()

    def __post_init__(self):
        ordered = tuple(sorted(self.versions, key=lambda v: v.version_number.value))
        object.__setattr__(self, 'versions', ordered)

        for expected_number, version in enumerate(ordered, start=1):
            if version.document_id != self.id:
                raise ValidationError(
                    f"Version {version.id} belongs to document {version.document_id}, not {self.id}",
                    field="versions"
                )
            if version.version_number.value != expected_number:
                raise ValidationError(
                    f"Version numbers must run 1..{len(ordered)} without gaps, "
                    f"found {version.version_number.value} at position {expected_number}",
                    field="versions"
                )

        seen = set()
        for version in ordered:
            if version.checksum is None:
                continue
            if version.checksum.value in seen:
                raise ValidationError(
                    f"Duplicate checksum {version.checksum.value} in version history",
                    field="versions"
                )
            seen.add(version.checksum.value)

    @classmethod
    def create(
        cls,
        filename: Union[Filename, str],
        original_name: Union[Filename, str],
        mime_type: Union[MimeType, str],
        size: Union[FileSize, int],
        uploaded_by: UserId,
        document_id: Optional[DocumentId] = None,
        status: DocumentStatus = DocumentStatus.DRAFT
    ) -> 'Document':
        """Create a new document with an empty version history.

        Raises:
            ValidationError: if any value object rejects its input
        """
        now = utc_now()
        return cls(
            id=document_id or DocumentId.generate(),
            filename=_filename(filename),
            original_name=_filename(original_name),
            mime_type=_mime_type(mime_type),
            size=_file_size(size),
            uploaded_by=uploaded_by,
            created_at=now,
            updated_at=now,
            status=status,
        )

    # Version history

    @property
    def version_count(self) -> int:
        return len(self.versions)

    def next_version_number(self) -> VersionNumber:
        if not self.versions:
            return VersionNumber.first()
        return max(v.version_number for v in self.versions).next()

    def add_version(self, data: VersionData) -> 'Document':
        """Append a new version and return the updated document.

        Raises:
            DuplicateDocumentError: if ``data.checksum`` matches an existing version
            ValidationError: if any value object rejects its input
        """
        checksum = _checksum(data.checksum)
        validate_no_duplicate_content(self.versions, checksum)

        now = utc_now()
        version = DocumentVersion(
            id=data.version_id or DocumentVersionId.generate(),
            document_id=self.id,
            filename=_filename(data.filename),
            original_name=_filename(data.original_name),
            mime_type=_mime_type(data.mime_type),
            size=_file_size(data.size),
            version_number=self.next_version_number(),
            uploaded_by=data.uploaded_by,
            created_at=now,
            path=data.path,
            content_ref=_content_ref(data.content_ref),
            checksum=checksum,
        )
        return replace(self, versions=self.versions + (version,), updated_at=now)

    def get_latest_version(self) -> Optional[DocumentVersion]:
        """Version with the highest version number, or None for an empty history."""
        if not self.versions:
            return None
        return max(self.versions, key=lambda v: v.version_number.value)

    def get_version(self, version_id: DocumentVersionId) -> Optional[DocumentVersion]:
        for version in self.versions:
            if version.id == version_id:
                return version
        return None

    def get_version_by_number(self, version_number: Union[VersionNumber, int]) -> Optional[DocumentVersion]:
        number = version_number.value if isinstance(version_number, VersionNumber) else version_number
        for version in self.versions:
            if version.version_number.value == number:
                return version
        return None

    def confirm_version(
        self,
        version_id: DocumentVersionId,
        path: str,
        content_ref: Union[ContentRef, str, None] = None,
        checksum: Union[Checksum, str, None] = None
    ) -> 'Document':
        """Fill in the storage details of a pending version.

        This is the only in-place edit a version ever receives.

        Raises:
            NotFoundError: if the version is not part of this document
            ChecksumMismatchError: if ``checksum`` differs from the declared one
            DuplicateDocumentError: if ``checksum`` collides with another version
        """
        version = self.get_version(version_id)
        if version is None:
            raise NotFoundError("DocumentVersion", version_id)

        new_checksum = _checksum(checksum)
        others = [v for v in self.versions if v.id != version_id]
        validate_no_duplicate_content(others, new_checksum)

        confirmed = version.confirm_upload(path, _content_ref(content_ref), new_checksum)
        versions = tuple(confirmed if v.id == version_id else v for v in self.versions)
        return replace(self, versions=versions, updated_at=utc_now())

    # Status

    def publish(self) -> 'Document':
        if self.status is DocumentStatus.PUBLISHED:
            return self
        return replace(self, status=self.status.publish(), updated_at=utc_now())

    def unpublish(self) -> 'Document':
        if self.status is DocumentStatus.DRAFT:
            return self
        return replace(self, status=self.status.unpublish(), updated_at=utc_now())

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.uploaded_by == user_id
