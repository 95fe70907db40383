# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints — health, readiness, metrics."""
from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from contact_directory.core.config import settings
from contact_directory.core.dependencies import get_employee_repo
from contact_directory.core.logging import get_logger
from contact_directory.repositories.employee_repository import EmployeeRepository

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    return {"status": "ok", "service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}


@router.get("/health/ready")
def readiness_check(repo: EmployeeRepository = Depends(get_employee_repo)):
    try:
        repo.verify_connection()
        return {"status": "ok", "database": "connected"}
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
