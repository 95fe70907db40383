# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Field validation — pure rules, no I/O.
Every rule runs on every record; all errors for a record are returned together.
"""

import re
from datetime import date, datetime
from typing import Optional, Sequence

from contact_directory.models.domain import FieldError, RawRecord

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^0[0-9]{9,10}$")

# (display format, exact shape, strptime format) in parse priority order.
DATE_FORMATS: tuple[tuple[str, re.Pattern, str], ...] = (
    ("yyyy.MM.dd", re.compile(r"^[0-9]{4}\.[0-9]{2}\.[0-9]{2}$"), "%Y.%m.%d"),
    ("yyyy-MM-dd", re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"), "%Y-%m-%d"),
    ("yyyy/MM/dd", re.compile(r"^[0-9]{4}/[0-9]{2}/[0-9]{2}$"), "%Y/%m/%d"),
)
DATE_FORMAT_NAMES = ", ".join(fmt for fmt, _, _ in DATE_FORMATS)


def strip_phone(phone: str) -> str:
    """Drop hyphens and spaces; idempotent."""
    return phone.replace("-", "").replace(" ", "").strip()


def parse_joined_date(value: str) -> Optional[date]:
    """Parse against the accepted formats in priority order; None if none match."""
    candidate = value.strip()
    for _, shape, strptime_format in DATE_FORMATS:
        if not shape.match(candidate):
            continue
        try:
            return datetime.strptime(candidate, strptime_format).date()
        except ValueError:
            # right shape, impossible calendar date (e.g. 2021-02-30)
            return None
    return None


def validate(record: RawRecord) -> list[FieldError]:
    """Return every rule violation for one record; empty list means valid."""
    errors: list[FieldError] = []

    if not record.name.strip():
        errors.append(FieldError(field="name", message="Name is required.", value=record.name))

    if not record.email.strip():
        errors.append(FieldError(field="email", message="Email is required.", value=record.email))
    elif not EMAIL_PATTERN.match(record.email.strip()):
        errors.append(FieldError(
            field="email",
            message=f"Invalid email format: '{record.email}'.",
            value=record.email,
        ))

    if not record.phone.strip():
        errors.append(FieldError(field="phone", message="Phone number is required.", value=record.phone))
    elif not PHONE_PATTERN.match(strip_phone(record.phone)):
        errors.append(FieldError(
            field="phone",
            message=(
                f"Invalid phone number: '{record.phone}'. "
                "Expected 10-11 digits starting with 0."
            ),
            value=record.phone,
        ))

    if not record.joined.strip():
        errors.append(FieldError(field="joined", message="Joined date is required.", value=record.joined))
    elif parse_joined_date(record.joined) is None:
        errors.append(FieldError(
            field="joined",
            message=f"Invalid date format: '{record.joined}'. Expected: {DATE_FORMAT_NAMES}.",
            value=record.joined,
        ))

    return errors


def validate_all(records: Sequence[RawRecord]) -> dict[int, list[FieldError]]:
    """Map 0-based batch index to its errors, for failing records only."""
    all_errors: dict[int, list[FieldError]] = {}
    for index, record in enumerate(records):
        errors = validate(record)
        if errors:
            all_errors[index] = errors
    return all_errors
