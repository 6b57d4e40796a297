"""Pagination feature for docvault.

- entities/: page/limit request and paginated result with metadata
"""

from .entities import PaginationParams, PaginatedResult, MAX_PAGE_LIMIT, DEFAULT_PAGE_LIMIT

__all__ = [
    "PaginationParams",
    "PaginatedResult",
    "MAX_PAGE_LIMIT",
    "DEFAULT_PAGE_LIMIT",
]
