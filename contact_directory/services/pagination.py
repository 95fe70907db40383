# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Pagination arithmetic and the paged employee query.
Bounds on page / page_size are enforced by the HTTP layer.
"""

import math

from contact_directory.models.domain import EmployeePage
from contact_directory.repositories.employee_repository import EmployeeRepository


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if total_count > 0 else 0


class PaginationEngine:
    def __init__(self, repo: EmployeeRepository):
        self._repo = repo

    def list(self, page: int, page_size: int) -> EmployeePage:
        total = self._repo.count()
        offset = page_offset(page, page_size)
        # offsets at or past the end never reach the store
        items = self._repo.list_slice(offset, page_size) if offset < total else []
        return EmployeePage(
            items=items,
            page=page,
            page_size=page_size,
            total_count=total,
            total_pages=total_pages(total, page_size),
        )
