# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Employee intake — parse, validate, de-duplicate, normalise, persist.

The stages run in a fixed order and the first failing stage decides the
outcome:

    empty batch ─► field validation ─► duplicates within the batch
                ─► duplicates already stored ─► bulk insert

Nothing is written unless every stage passes. The pre-insert duplicate checks
are check-then-act; the store's unique index on ``name`` catches the
concurrent case and is reported as the same duplicate outcome.
"""

import threading
from collections import Counter
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from contact_directory.core.logging import get_logger
from contact_directory.metrics import (
    EMPLOYEES_CREATED, EMPLOYEES_TOTAL, INTAKE_BATCH_SIZE, INTAKE_DURATION, INTAKE_REJECTED,
)
from contact_directory.models.domain import FieldError, FormatHint, RawRecord
from contact_directory.repositories.employee_repository import (
    DuplicateNameError, EmployeeRepository, IntakeCancelled,
)
from contact_directory.services import field_validator, format_detector
from contact_directory.services.format_parsers import FormatError, RecordFormat
from contact_directory.services.record_normalizer import normalize, to_public

logger = get_logger(__name__)

EMPTY_BATCH_MESSAGE = "No employee data provided."


class IntakeOutcome(str, Enum):
    CREATED = "created"
    FORMAT_ERROR = "format_error"
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_NAMES = "duplicate_names"


class IntakeResult(BaseModel):
    outcome: IntakeOutcome
    message: Optional[str] = None
    created: list[dict[str, Any]] = Field(default_factory=list)
    validation_errors: dict[int, list[FieldError]] = Field(default_factory=dict)
    duplicate_names: list[str] = Field(default_factory=list)
    format_error: Optional[dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return self.outcome is IntakeOutcome.CREATED


def find_batch_duplicates(records: Sequence[RawRecord]) -> list[str]:
    """Trimmed names that occur more than once, in first-seen order."""
    tally = Counter(r.name.strip() for r in records)
    return [name for name, count in tally.items() if count > 1]


class IntakeOrchestrator:
    """Drives one create request end to end."""

    def __init__(self, repo: EmployeeRepository):
        self._repo = repo

    def submit(self, content: str, hint: Optional[FormatHint] = None,
               record_format: Optional[RecordFormat] = None,
               cancel_event: Optional[threading.Event] = None) -> IntakeResult:
        """Parse raw text (explicit format, or detected from hint/content) then create."""
        try:
            if record_format is not None:
                records = format_detector.parse_as(record_format, content)
            else:
                records = format_detector.parse(content, hint)
        except FormatError as exc:
            INTAKE_REJECTED.labels(reason=IntakeOutcome.FORMAT_ERROR.value).inc()
            logger.warning("Failed to parse employee data: %s", exc.message)
            return IntakeResult(
                outcome=IntakeOutcome.FORMAT_ERROR,
                message=exc.message,
                format_error=exc.to_detail(),
            )
        return self.create(records, cancel_event=cancel_event)

    def create(self, records: Sequence[RawRecord],
               cancel_event: Optional[threading.Event] = None) -> IntakeResult:
        with INTAKE_DURATION.time():
            return self._create(list(records), cancel_event)

    def _create(self, records: list[RawRecord],
                cancel_event: Optional[threading.Event]) -> IntakeResult:
        logger.info("Creating %d employee(s)", len(records))
        INTAKE_BATCH_SIZE.observe(len(records))

        if not records:
            logger.warning("Empty employee list received")
            return self._reject_validation({
                0: [FieldError(field="employees", message=EMPTY_BATCH_MESSAGE)],
            }, message=EMPTY_BATCH_MESSAGE)

        validation_errors = field_validator.validate_all(records)
        if validation_errors:
            logger.warning("Validation failed for %d employee(s)", len(validation_errors))
            return self._reject_validation(validation_errors)

        batch_duplicates = find_batch_duplicates(records)
        if batch_duplicates:
            logger.warning("Duplicate names found within batch: %s", ", ".join(batch_duplicates))
            return self._reject_duplicates(batch_duplicates)

        names = [r.name.strip() for r in records]
        existing = self._repo.find_existing_names(names, cancel_event=cancel_event)
        if existing:
            logger.warning("Duplicate names found in store: %s", ", ".join(existing))
            return self._reject_duplicates(existing)

        normalized = [normalize(r) for r in records]
        try:
            self._repo.insert_many(normalized, cancel_event=cancel_event)
        except DuplicateNameError as exc:
            logger.warning("Store rejected duplicate names: %s", ", ".join(exc.names))
            return self._reject_duplicates(exc.names)
        except IntakeCancelled:
            logger.info("Intake cancelled before commit; nothing persisted")
            raise

        EMPLOYEES_CREATED.inc(len(normalized))
        EMPLOYEES_TOTAL.inc(len(normalized))
        logger.info("Successfully created %d employee(s)", len(normalized))
        return IntakeResult(
            outcome=IntakeOutcome.CREATED,
            created=[to_public(r) for r in normalized],
        )

    # ── Private ────────────────────────────────────────────────────────

    @staticmethod
    def _reject_validation(errors: dict[int, list[FieldError]],
                           message: str = "Validation failed.") -> IntakeResult:
        INTAKE_REJECTED.labels(reason=IntakeOutcome.VALIDATION_FAILED.value).inc()
        return IntakeResult(
            outcome=IntakeOutcome.VALIDATION_FAILED,
            message=message,
            validation_errors=errors,
        )

    @staticmethod
    def _reject_duplicates(names: Sequence[str]) -> IntakeResult:
        INTAKE_REJECTED.labels(reason=IntakeOutcome.DUPLICATE_NAMES.value).inc()
        return IntakeResult(
            outcome=IntakeOutcome.DUPLICATE_NAMES,
            message=f"Duplicate employee names: {', '.join(names)}",
            duplicate_names=list(names),
        )
