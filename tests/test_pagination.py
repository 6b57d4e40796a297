"""Tests for pagination entities."""

import pytest

from docvault.core.exceptions import ValidationError
from docvault.features.pagination import MAX_PAGE_LIMIT, PaginatedResult, PaginationParams


class TestPaginationParams:
    def test_offset(self):
        assert PaginationParams().offset == 0
        assert PaginationParams(page=3, limit=10).offset == 20

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, MAX_PAGE_LIMIT + 1)])
    def test_rejects_out_of_range(self, page, limit):
        with pytest.raises(ValidationError):
            PaginationParams(page=page, limit=limit)


class TestPaginatedResult:
    def test_page_arithmetic(self):
        result = PaginatedResult.from_params(["a", "b"], total=5, params=PaginationParams(page=2, limit=2))

        assert result.count == 2
        assert result.total_pages == 3
        assert result.has_next_page
        assert result.has_previous_page

    def test_empty(self):
        result = PaginatedResult.empty(PaginationParams())
        assert result.total_pages == 0
        assert not result.has_next_page
        assert not result.has_previous_page

    def test_map_and_meta(self):
        result = PaginatedResult.from_params([1, 2], total=2, params=PaginationParams(limit=10))

        doubled = result.map(lambda n: n * 2)

        assert doubled.items == [2, 4]
        assert doubled.meta() == {
            "page": 1,
            "limit": 10,
            "total_items": 2,
            "total_pages": 1,
            "has_next_page": False,
            "has_previous_page": False,
        }
