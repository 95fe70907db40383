# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Employee endpoints — paged list, lookup by name, bulk create.
Thin HTTP layer — reads the payload, delegates ALL logic to the services.
"""

import asyncio
import threading
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.datastructures import UploadFile

from contact_directory.core.config import settings
from contact_directory.core.dependencies import get_employee_service, get_intake_orchestrator
from contact_directory.core.logging import get_logger
from contact_directory.models.domain import FormatHint
from contact_directory.schemas import ApiResponse, EmployeeOut, PaginatedEmployees
from contact_directory.services.employee_service import EmployeeService
from contact_directory.services.format_parsers import FormatError, RecordFormat
from contact_directory.services.intake_service import IntakeOrchestrator, IntakeOutcome, IntakeResult

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Employees"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@router.get("/employees", summary="List employees, ordered by name")
def list_employees(
    page: int = Query(default=1),
    page_size: int = Query(default=settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    service: EmployeeService = Depends(get_employee_service),
):
    if page < 1:
        return ApiResponse.fail("Page must be greater than or equal to 1.").to_response()
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        return ApiResponse.fail(
            f"PageSize must be between 1 and {settings.MAX_PAGE_SIZE}."
        ).to_response()
    page_data = PaginatedEmployees(**service.list_employees(page, page_size))
    return ApiResponse.ok(page_data).to_response()


@router.get("/employees/{name:path}", summary="Get one employee by exact name")
def get_employee(name: str, service: EmployeeService = Depends(get_employee_service)):
    # percent-decoded before routing; :path keeps names containing "/" reachable
    logger.info("Looking up employee name=%s", name)
    result = service.get_employee(name)
    if result is None:
        return ApiResponse.fail(f"Employee '{name}' not found.", code=404).to_response()
    return ApiResponse.ok(EmployeeOut(**result)).to_response()


@router.post("/employees", status_code=201, summary="Create employees from CSV or JSON")
async def create_employees(
    request: Request,
    intake: IntakeOrchestrator = Depends(get_intake_orchestrator),
):
    """
    Accepted inputs, first match wins:

    - multipart upload in any file field (format from extension, then content type, then sniffing)
    - form field ``csv`` (CSV text)
    - form field ``json`` (JSON text)
    - form field ``data`` (format sniffed)
    - raw body; ``application/json`` / ``text/csv`` select the parser, anything else is sniffed
    """
    try:
        if _is_form(request):
            content, hint, record_format = await _read_form(request)
        else:
            content, hint, record_format = await _read_body(request)
    except FormatError as exc:
        logger.warning("Rejected employee payload: %s", exc.message)
        return ApiResponse.fail(exc.message, data={"formatError": exc.to_detail()}).to_response()

    cancel_event = threading.Event()
    try:
        result = await run_in_threadpool(intake.submit, content, hint, record_format, cancel_event)
    except asyncio.CancelledError:
        # the worker thread checks this before every store call
        cancel_event.set()
        raise
    return _intake_response(result)


# ── Private ────────────────────────────────────────────────────────────

def _is_form(request: Request) -> bool:
    content_type = request.headers.get("content-type", "").lower()
    return content_type.startswith(FORM_CONTENT_TYPES)


def _size_error() -> FormatError:
    return FormatError(f"Payload exceeds the {settings.MAX_UPLOAD_BYTES} byte limit.")


def _check_size(size: int) -> None:
    if size > settings.MAX_UPLOAD_BYTES:
        raise _size_error()


def _text_field(value) -> Optional[str]:
    """A non-blank form text field, size-checked like uploads; None otherwise."""
    if not isinstance(value, str) or not value.strip():
        return None
    _check_size(len(value.encode("utf-8")))
    return value


def _decode(raw: bytes) -> str:
    _check_size(len(raw))
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FormatError("Content is not valid UTF-8 text.", diagnostic=str(exc)) from exc


async def _read_form(request: Request) -> tuple[str, Optional[FormatHint], Optional[RecordFormat]]:
    try:
        form = await request.form(max_part_size=settings.MAX_UPLOAD_BYTES)
    except HTTPException as exc:
        # multipart text parts over the limit; urlencoded fields are checked in _text_field
        if "maximum size" in str(exc.detail):
            raise _size_error() from exc
        raise

    for _, value in form.multi_items():
        if isinstance(value, UploadFile):
            raw = await value.read()
            if raw:
                logger.info("Processing file upload: %s (%s)", value.filename, value.content_type)
                hint = FormatHint(filename=value.filename, content_type=value.content_type)
                return _decode(raw), hint, None

    csv_text = _text_field(form.get("csv"))
    if csv_text is not None:
        logger.info("Processing CSV text from form field")
        return csv_text, None, RecordFormat.CSV

    json_text = _text_field(form.get("json"))
    if json_text is not None:
        logger.info("Processing JSON text from form field")
        return json_text, None, RecordFormat.JSON

    data_text = _text_field(form.get("data"))
    if data_text is not None:
        logger.info("Processing data text from form field (auto-detecting format)")
        return data_text, None, None

    raise FormatError(
        "No file or text data provided. Use 'file' for file upload, "
        "'csv' or 'json' for text input, or 'data' for auto-detected text."
    )


async def _read_body(request: Request) -> tuple[str, Optional[FormatHint], Optional[RecordFormat]]:
    content = _decode(await request.body())
    content_type = request.headers.get("content-type")
    logger.info("Processing request body (content-type=%s)", content_type or "none")
    return content, FormatHint(content_type=content_type), None


def _intake_response(result: IntakeResult):
    if result.outcome is IntakeOutcome.CREATED:
        created = [EmployeeOut(**r) for r in result.created]
        return ApiResponse.ok(created, code=201).to_response()
    if result.outcome is IntakeOutcome.FORMAT_ERROR:
        return ApiResponse.fail(result.message, data={"formatError": result.format_error}).to_response()
    if result.outcome is IntakeOutcome.VALIDATION_FAILED:
        errors = {
            str(index): [e.model_dump() for e in field_errors]
            for index, field_errors in result.validation_errors.items()
        }
        return ApiResponse.fail(result.message, data={"validationErrors": errors}).to_response()
    return ApiResponse.fail(
        result.message, data={"duplicateNames": result.duplicate_names}
    ).to_response()
