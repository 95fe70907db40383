# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Format detection — picks CSV or JSON for a payload.

Precedence: filename extension, then declared content type, then sniffing
the first non-whitespace character.
"""

import os
from typing import Optional

from contact_directory.models.domain import FormatHint, RawRecord
from contact_directory.services.format_parsers import PARSERS, RecordFormat

EXTENSIONS = {
    ".csv": RecordFormat.CSV,
    ".json": RecordFormat.JSON,
}


def _from_filename(filename: Optional[str]) -> Optional[RecordFormat]:
    if not filename:
        return None
    _, extension = os.path.splitext(filename)
    return EXTENSIONS.get(extension.lower())


def _from_content_type(content_type: Optional[str]) -> Optional[RecordFormat]:
    if not content_type:
        return None
    content_type = content_type.lower()
    if "json" in content_type:
        return RecordFormat.JSON
    if "csv" in content_type:
        return RecordFormat.CSV
    return None


def sniff_format(content: str) -> RecordFormat:
    stripped = content.lstrip()
    if stripped.startswith(("[", "{")):
        return RecordFormat.JSON
    return RecordFormat.CSV


def detect_format(content: str, hint: Optional[FormatHint] = None) -> RecordFormat:
    """Pure: same content and hint always yield the same format."""
    hint = hint or FormatHint()
    return (
        _from_filename(hint.filename)
        or _from_content_type(hint.content_type)
        or sniff_format(content)
    )


def parse(content: str, hint: Optional[FormatHint] = None) -> list[RawRecord]:
    """Detect the format and parse. Raises FormatError."""
    return PARSERS[detect_format(content, hint)](content)


def parse_as(record_format: RecordFormat, content: str) -> list[RawRecord]:
    return PARSERS[record_format](content)
