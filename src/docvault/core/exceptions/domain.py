"""Domain exceptions for docvault.

Category bases (business logic, authorization, database) plus the shared
errors used by every feature.
"""

from typing import Any, Dict, Optional

from .base import DocVaultError


# Category bases
class BusinessLogicError(DocVaultError):
    """Raised when a domain rule is violated."""
    pass


class AuthorizationError(DocVaultError):
    """Raised when a caller is not allowed to perform an operation."""
    pass


class DatabaseError(DocVaultError):
    """Base class for persistence failures."""
    pass


class ConfigurationError(DocVaultError):
    """Raised when settings are missing or invalid."""
    pass


class NotFoundError(BusinessLogicError):
    """Raised when a document, version, user or permission does not exist."""

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        enhanced_details["entity_type"] = entity_type
        enhanced_details["entity_id"] = str(entity_id)

        super().__init__(
            message=message or f"{entity_type} with ID {entity_id} not found",
            error_code="NOT_FOUND",
            details=enhanced_details
        )

        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationError(BusinessLogicError, ValueError):
    """Raised when a value object rejects its input."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if field:
            enhanced_details["field"] = field
        if value is not None:
            enhanced_details["value"] = repr(value)

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=enhanced_details
        )

        self.field = field
        self.value = value


class ForbiddenError(AuthorizationError):
    """Raised when a caller may not act on a resource at all."""

    def __init__(
        self,
        message: str,
        resource: str,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        enhanced_details["resource"] = resource

        super().__init__(
            message=message,
            error_code="FORBIDDEN",
            details=enhanced_details
        )

        self.resource = resource


class ConstraintError(DatabaseError):
    """Raised when the store rejects a write on a uniqueness or FK constraint.

    Racing writers land here; retrying is up to the caller.
    """

    def __init__(
        self,
        message: str,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if constraint:
            enhanced_details["constraint"] = constraint

        super().__init__(
            message=message,
            error_code="CONSTRAINT_VIOLATION",
            details=enhanced_details
        )

        self.constraint = constraint
