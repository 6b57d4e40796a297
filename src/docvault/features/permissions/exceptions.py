"""Permission feature exceptions."""

from typing import Any, Dict, Optional

from ...core.exceptions import AuthorizationError, BusinessLogicError


class InsufficientPermissionError(AuthorizationError):
    """Raised when a user lacks the required level on a document."""

    def __init__(
        self,
        user_id: Any,
        document_id: Any,
        required_permission: Any,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        required = getattr(required_permission, "value", required_permission)

        enhanced_details = details or {}
        enhanced_details.update({
            "user_id": str(user_id),
            "document_id": str(document_id),
            "required_permission": str(required),
        })

        super().__init__(
            message=message or f"User {user_id} lacks {required} permission on document {document_id}",
            error_code="INSUFFICIENT_PERMISSION",
            details=enhanced_details
        )

        self.user_id = user_id
        self.document_id = document_id
        self.required_permission = required_permission


class CannotRevokeOwnerPermissionError(BusinessLogicError):
    """Raised when revoking the document owner's access is attempted."""

    def __init__(
        self,
        document_id: Any,
        message: str = "Cannot revoke document owner's permission",
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        enhanced_details["document_id"] = str(document_id)

        super().__init__(
            message=message,
            error_code="CANNOT_REVOKE_OWNER_PERMISSION",
            details=enhanced_details
        )

        self.document_id = document_id
