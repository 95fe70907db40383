# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: CSV and JSON parsers — text in, RawRecords out.

Neither parser validates field contents; that is FieldValidator's job. They
only reject input whose *shape* cannot be turned into records.
"""

import json
from enum import Enum
from typing import Any, Callable, Optional

from contact_directory.models.domain import RawRecord

CSV_MIN_FIELDS = 4

# JSON key (lower-cased) -> RawRecord attribute
JSON_FIELDS = {
    "name": "name",
    "email": "email",
    "tel": "phone",
    "joined": "joined",
}


class RecordFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


class FormatError(ValueError):
    """Input text could not be parsed into records."""

    def __init__(self, message: str, *, line: Optional[int] = None,
                 field_count: Optional[int] = None, diagnostic: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.field_count = field_count
        self.diagnostic = diagnostic

    def to_detail(self) -> dict[str, Any]:
        detail: dict[str, Any] = {"message": self.message}
        if self.line is not None:
            detail["line"] = self.line
        if self.field_count is not None:
            detail["fieldCount"] = self.field_count
        if self.diagnostic is not None:
            detail["diagnostic"] = self.diagnostic
        return detail


def parse_csv(content: str) -> list[RawRecord]:
    """One record per non-blank line: name, email, phone, joined[, ignored...]."""
    records: list[RawRecord] = []
    if not content or not content.strip():
        return records

    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(",")]
        if len(parts) < CSV_MIN_FIELDS:
            raise FormatError(
                f"Invalid CSV at line {line_number}: expected at least {CSV_MIN_FIELDS} fields "
                f"(name, email, phone, joined date), got {len(parts)}.",
                line=line_number,
                field_count=len(parts),
            )
        records.append(RawRecord(name=parts[0], email=parts[1], phone=parts[2], joined=parts[3]))
    return records


def _record_from_object(index: int, obj: Any) -> RawRecord:
    if not isinstance(obj, dict):
        raise FormatError(
            f"Invalid JSON format: element {index} is not an object.",
            diagnostic=f"expected object, got {type(obj).__name__}",
        )
    values = {attr: "" for attr in JSON_FIELDS.values()}
    for key, value in obj.items():
        attr = JSON_FIELDS.get(str(key).lower())
        if attr is None:
            continue
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise FormatError(
                f"Invalid JSON format: field '{key}' of element {index} must be a string.",
                diagnostic=f"expected string, got {type(value).__name__}",
            )
        values[attr] = value
    return RawRecord(**values)


def parse_json(content: str) -> list[RawRecord]:
    """A single object or an array of objects; keys are case-insensitive."""
    if not content or not content.strip():
        return []

    try:
        payload = json.loads(content.strip())
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError and the int digit limit are both ValueError
        raise FormatError(f"Invalid JSON format: {exc}", diagnostic=str(exc)) from exc

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        raise FormatError(
            "Invalid JSON format: expected an object or an array of objects.",
            diagnostic=f"top-level value is {type(payload).__name__}",
        )
    return [_record_from_object(i, obj) for i, obj in enumerate(payload)]


PARSERS: dict[RecordFormat, Callable[[str], list[RawRecord]]] = {
    RecordFormat.CSV: parse_csv,
    RecordFormat.JSON: parse_json,
}
