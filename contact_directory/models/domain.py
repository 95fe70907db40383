# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RawRecord(BaseModel):
    """One employee as supplied by the caller, before any validation."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    joined: str = ""


class FieldError(BaseModel):
    """A single rule violation on one field of one record."""
    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    value: str = ""


class NormalizedRecord(BaseModel):
    """Trimmed, digits-only, date-parsed record ready for storage."""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str
    joined: date


class StoredEmployee(NormalizedRecord):
    id: int
    created_at: datetime


class EmployeePage(BaseModel):
    items: list[StoredEmployee]
    page: int
    page_size: int
    total_count: int
    total_pages: int


class FormatHint(BaseModel):
    """What the caller told us about the payload, if anything."""
    model_config = ConfigDict(frozen=True)

    filename: Optional[str] = None
    content_type: Optional[str] = None
