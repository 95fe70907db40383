# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
All components are stateless apart from the engine, so one instance each.
"""

from contact_directory.core.database import engine
from contact_directory.repositories.employee_repository import EmployeeRepository
from contact_directory.services.employee_service import EmployeeService
from contact_directory.services.intake_service import IntakeOrchestrator
from contact_directory.services.pagination import PaginationEngine

# ── Singleton instances ──
_employee_repo = EmployeeRepository(engine)
_intake = IntakeOrchestrator(_employee_repo)
_employee_service = EmployeeService(_employee_repo, PaginationEngine(_employee_repo))


# ── FastAPI dependency functions ──
def get_employee_repo() -> EmployeeRepository:
    return _employee_repo


def get_intake_orchestrator() -> IntakeOrchestrator:
    return _intake


def get_employee_service() -> EmployeeService:
    return _employee_service
