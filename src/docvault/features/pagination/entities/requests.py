"""Pagination request entities."""

from dataclasses import dataclass

from ....core.exceptions import ValidationError

MAX_PAGE_LIMIT = 100
DEFAULT_PAGE_LIMIT = 20


@dataclass(frozen=True)
class PaginationParams:
    """Offset-based pagination request (page/limit)."""

    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT

    def __post_init__(self):
        """Validate pagination parameters."""
        if self.page < 1:
            raise ValidationError("Page must be >= 1", field="page", value=self.page)
        if self.limit < 1 or self.limit > MAX_PAGE_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_LIMIT}", field="limit", value=self.limit)

    @property
    def offset(self) -> int:
        """Calculate offset from page and limit."""
        return (self.page - 1) * self.limit
