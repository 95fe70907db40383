"""
Pagination arithmetic and PaginationEngine.
"""
import math
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from contact_directory.models.domain import StoredEmployee
from contact_directory.services.pagination import PaginationEngine, page_offset, total_pages


def _employee(i, name):
    return StoredEmployee(id=i, name=name, email=f"{i}@x.com", phone="01012345678",
                          joined=date(2020, 1, 1), created_at=datetime.now(timezone.utc))


class TestArithmetic:
    @pytest.mark.parametrize("total", [0, 1, 2, 5, 99, 100, 101, 1000])
    @pytest.mark.parametrize("size", [1, 2, 3, 10, 100])
    def test_total_pages_is_ceiling(self, total, size):
        assert total_pages(total, size) == math.ceil(total / size)

    def test_zero_total_is_zero_pages(self):
        assert total_pages(0, 10) == 0

    @pytest.mark.parametrize("page,size,offset", [(1, 10, 0), (2, 2, 2), (3, 100, 200)])
    def test_offset(self, page, size, offset):
        assert page_offset(page, size) == offset


class TestPaginationEngine:
    def test_second_page_of_five(self):
        repo = MagicMock()
        repo.count.return_value = 5
        repo.list_slice.return_value = [_employee(3, "C"), _employee(4, "D")]
        result = PaginationEngine(repo).list(page=2, page_size=2)
        repo.list_slice.assert_called_once_with(2, 2)
        assert [e.name for e in result.items] == ["C", "D"]
        assert result.total_count == 5
        assert result.total_pages == 3
        assert (result.page, result.page_size) == (2, 2)

    def test_empty_store(self):
        repo = MagicMock()
        repo.count.return_value = 0
        result = PaginationEngine(repo).list(page=1, page_size=10)
        repo.list_slice.assert_not_called()
        assert result.items == []
        assert result.total_pages == 0

    def test_page_beyond_last_is_empty_not_error(self):
        repo = MagicMock()
        repo.count.return_value = 3
        result = PaginationEngine(repo).list(page=9, page_size=2)
        repo.list_slice.assert_not_called()
        assert result.items == []
        assert result.total_pages == 2

    def test_huge_page_number_skips_slice_query(self):
        repo = MagicMock()
        repo.count.return_value = 3
        result = PaginationEngine(repo).list(page=10**19, page_size=10)
        repo.list_slice.assert_not_called()
        assert result.items == []
        assert result.page == 10**19
