# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Record normalisation — pure computation, no side effects.
"""

from typing import Any, Union

from contact_directory.models.domain import NormalizedRecord, RawRecord, StoredEmployee
from contact_directory.services.field_validator import DATE_FORMAT_NAMES, parse_joined_date, strip_phone


class NormalizationError(RuntimeError):
    """A record that passed validation could not be normalised (internal bug)."""


def normalize(record: RawRecord) -> NormalizedRecord:
    """Convert a validated record into its storage form."""
    joined = parse_joined_date(record.joined)
    if joined is None:
        raise NormalizationError(
            f"Cannot parse date: '{record.joined}'. Expected formats: {DATE_FORMAT_NAMES}"
        )
    return NormalizedRecord(
        name=record.name.strip(),
        email=record.email.strip(),
        phone=strip_phone(record.phone),
        joined=joined,
    )


def to_public(employee: Union[NormalizedRecord, StoredEmployee]) -> dict[str, Any]:
    """Render for API output; dates always as yyyy-MM-dd (ISO 8601)."""
    return {
        "name": employee.name,
        "email": employee.email,
        "tel": employee.phone,
        "joined": employee.joined.isoformat(),
    }
