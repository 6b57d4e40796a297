"""Document feature exceptions."""

from typing import Any, Dict, Optional

from ...core.exceptions import BusinessLogicError


class DuplicateDocumentError(BusinessLogicError):
    """Raised when new content matches the checksum of an existing version."""

    def __init__(
        self,
        checksum: str,
        message: str = "Document with this content already exists",
        document_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        enhanced_details["checksum"] = str(checksum)
        if document_id:
            enhanced_details["document_id"] = str(document_id)

        super().__init__(
            message=message,
            error_code="DUPLICATE_DOCUMENT",
            details=enhanced_details
        )

        self.checksum = str(checksum)
        self.document_id = document_id


class ChecksumMismatchError(BusinessLogicError):
    """Raised when confirmed bytes do not match the checksum declared at initiate time."""

    def __init__(
        self,
        version_id: Any,
        expected: str,
        actual: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        enhanced_details.update({
            "version_id": str(version_id),
            "expected_checksum": str(expected),
            "actual_checksum": str(actual),
        })

        super().__init__(
            message=message or f"Checksum mismatch for version {version_id}",
            error_code="CHECKSUM_MISMATCH",
            details=enhanced_details
        )

        self.version_id = version_id
        self.expected = str(expected)
        self.actual = str(actual)
