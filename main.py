# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Employee Emergency Contacts Service
===================================
Keeps a directory of employee emergency contacts. Employees are created in
batches from CSV or JSON (file upload, form field or raw body), validated,
checked for duplicate names and stored; the directory is listed page by page
in name order or looked up by exact name.

Run:  uvicorn main:app --port 8000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from contact_directory.controllers import employee_controller, system_controller
from contact_directory.core.config import settings
from contact_directory.core.database import create_tables, engine
from contact_directory.core.dependencies import get_employee_service
from contact_directory.core.logging import get_logger
from contact_directory.middleware import MetricsMiddleware, RequestIDMiddleware
from contact_directory.schemas import ApiResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    create_tables(engine)
    try:
        get_employee_service().seed_gauges()
    except Exception:
        logger.warning("Could not seed gauges — DB may not be ready yet")
    yield
    engine.dispose()
    logger.info("Shutting down — connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Employee Emergency Contacts Service",
    description="Create, list and look up employee emergency-contact records.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(system_controller.router)
app.include_router(employee_controller.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ())[1:]) or 'request'}: {err.get('msg')}"
        for err in exc.errors()
    )
    return ApiResponse.fail(f"Invalid request parameters: {problems}").to_response()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return ApiResponse.fail(str(exc.detail), code=exc.status_code).to_response()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return ApiResponse.fail("An internal server error occurred.", code=500).to_response()
