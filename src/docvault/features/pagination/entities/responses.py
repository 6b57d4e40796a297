"""Pagination response entities."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, TypeVar

from .requests import PaginationParams

T = TypeVar('T')
U = TypeVar('U')


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of items plus the total across all pages."""

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @classmethod
    def empty(cls, params: PaginationParams) -> 'PaginatedResult[T]':
        return cls(items=[], total=0, page=params.page, limit=params.limit)

    @classmethod
    def from_params(cls, items: List[T], total: int, params: PaginationParams) -> 'PaginatedResult[T]':
        return cls(items=list(items), total=total, page=params.page, limit=params.limit)

    @property
    def count(self) -> int:
        """Number of items in the current page."""
        return len(self.items)

    @property
    def total_pages(self) -> int:
        if self.limit == 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    def map(self, fn: Callable[[T], U]) -> 'PaginatedResult[U]':
        return PaginatedResult(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            limit=self.limit,
        )

    def meta(self) -> Dict[str, Any]:
        """Pagination metadata for API responses."""
        return {
            "page": self.page,
            "limit": self.limit,
            "total_items": self.total,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }
