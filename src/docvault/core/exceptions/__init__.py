"""Exception hierarchy for docvault."""

from .base import DocVaultError, create_error_response
from .domain import (
    BusinessLogicError,
    AuthorizationError,
    DatabaseError,
    ConfigurationError,
    NotFoundError,
    ValidationError,
    ForbiddenError,
    ConstraintError,
)

__all__ = [
    "DocVaultError",
    "create_error_response",
    "BusinessLogicError",
    "AuthorizationError",
    "DatabaseError",
    "ConfigurationError",
    "NotFoundError",
    "ValidationError",
    "ForbiddenError",
    "ConstraintError",
]
