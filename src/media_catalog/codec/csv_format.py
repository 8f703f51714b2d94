"""Low-level CSV helpers shared by every entity codec.

The catalog's CSV dialect is deliberately small: only free-text fields are
quoted, and a line is split on commas that sit outside a ``"..."`` span.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import List, Optional

from ..domain.result import FormatError

DATE_FORMAT = "%Y-%m-%d"

# A comma followed by an even number of quotes up to the end of the line is
# outside any quoted span.
_FIELD_SEPARATOR = re.compile(r',(?=(?:[^"]*"[^"]*")*[^"]*$)')
_LINE_SEPARATOR = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split CSV text into lines on ``\\n`` or ``\\r\\n``."""
    return _LINE_SEPARATOR.split(text)


def split_row(line: str) -> List[str]:
    """Split one CSV line into unquoted, trimmed fields."""
    return [unquote(raw) for raw in _FIELD_SEPARATOR.split(line)]


def unquote(raw: str) -> str:
    """Strip quoting from a field and collapse doubled quotes."""
    value = raw.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1].replace('""', '"')
    else:
        value = value.replace('"', "")
    return value.strip()


def quote(text: Optional[str]) -> str:
    """Wrap a free-text field in quotes, doubling any quotes inside it."""
    return '"' + (text or "").replace('"', '""') + '"'


def plain(value: object) -> str:
    """Render a field unquoted. ``None`` becomes an empty field."""
    if value is None:
        return ""
    if isinstance(value, float):
        return repr(value)
    return str(value)


def format_date(value: Optional[date]) -> str:
    """Render a date as ``yyyy-MM-dd``."""
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)


def parse_date(text: str) -> date:
    """Parse a ``yyyy-MM-dd`` date."""
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise FormatError(f"Invalid date {text!r}: expected yyyy-MM-dd") from e


def parse_optional_date(text: str) -> Optional[date]:
    return parse_date(text) if text.strip() else None


def parse_float(text: str) -> float:
    try:
        return float(text)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid number {text!r}") from e


def parse_int(text: str) -> int:
    try:
        return int(text)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid integer {text!r}") from e


def parse_optional_int(text: str) -> Optional[int]:
    """Parse an identifier column; an empty column means unassigned."""
    return parse_int(text) if text.strip() else None


def optional_text(text: str) -> Optional[str]:
    return text if text else None
