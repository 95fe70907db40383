# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports EmployeeRepository."""
from contact_directory.repositories.employee_repository import (
    DuplicateNameError,
    EmployeeRepository,
    IntakeCancelled,
)

__all__ = ["DuplicateNameError", "EmployeeRepository", "IntakeCancelled"]
