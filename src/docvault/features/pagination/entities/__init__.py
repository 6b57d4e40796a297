"""Pagination entities."""

from .requests import PaginationParams, MAX_PAGE_LIMIT, DEFAULT_PAGE_LIMIT
from .responses import PaginatedResult

__all__ = [
    "PaginationParams",
    "PaginatedResult",
    "MAX_PAGE_LIMIT",
    "DEFAULT_PAGE_LIMIT",
]
