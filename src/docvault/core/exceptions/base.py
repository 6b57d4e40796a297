"""Base exceptions for docvault.

Every error raised by the library inherits from DocVaultError and carries
an error code plus a details dict suitable for API responses.
"""

from typing import Any, Dict, Optional


class DocVaultError(Exception):
    """Base exception for all docvault errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


def create_error_response(exception: DocVaultError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The docvault exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
