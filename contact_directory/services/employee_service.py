# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Directory queries — paged listing and lookup by name.
"""

from typing import Any, Dict, Optional

from contact_directory.core.logging import get_logger
from contact_directory.metrics import EMPLOYEES_TOTAL
from contact_directory.repositories.employee_repository import EmployeeRepository
from contact_directory.services.pagination import PaginationEngine
from contact_directory.services.record_normalizer import to_public

logger = get_logger(__name__)


class EmployeeService:
    def __init__(self, repo: EmployeeRepository, pagination: PaginationEngine):
        self._repo = repo
        self._pagination = pagination

    def seed_gauges(self):
        EMPLOYEES_TOTAL.set(self._repo.count())
        logger.info("Prometheus gauges loaded from DB")

    def list_employees(self, page: int, page_size: int) -> Dict[str, Any]:
        logger.info("Fetching employees page=%d page_size=%d", page, page_size)
        result = self._pagination.list(page, page_size)
        logger.info("Found %d employees (total: %d)", len(result.items), result.total_count)
        return {
            "items": [to_public(e) for e in result.items],
            "page": result.page,
            "pageSize": result.page_size,
            "totalCount": result.total_count,
            "totalPages": result.total_pages,
        }

    def get_employee(self, name: str) -> Optional[Dict[str, Any]]:
        """Exact, case-sensitive match; None when nobody has that name."""
        employee = self._repo.get_by_name(name)
        if employee is None:
            logger.warning("Employee not found: %s", name)
            return None
        return to_public(employee)
