"""JSON array helpers shared by every entity codec."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..domain.result import FormatError
from .csv_format import format_date, parse_date


def render_array(objects: Iterable[Dict[str, Any]]) -> str:
    """Render objects as a JSON array followed by a newline."""
    return json.dumps(list(objects), indent=2, ensure_ascii=False) + "\n"


def render_object(obj: Dict[str, Any]) -> str:
    """Render a single object, indented like an array element."""
    return json.dumps(obj, indent=2, ensure_ascii=False)


def parse_array(text: str) -> List[Dict[str, Any]]:
    """Parse a JSON array of objects."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}") from e

    if not isinstance(data, list):
        raise FormatError(f"Expected a JSON array, got {type(data).__name__}")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise FormatError(f"Element {index} is not a JSON object")
    return data


def get_int(raw: Dict[str, Any], key: str, default: Optional[int] = 0) -> Optional[int]:
    """Read an integer, accepting integral floats and numeric strings."""
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise FormatError(f"Field {key!r} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise FormatError(f"Field {key!r} must be an integer, got {value!r}")


def get_float(raw: Dict[str, Any], key: str) -> float:
    value = raw.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise FormatError(f"Field {key!r} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise FormatError(f"Field {key!r} must be a number, got {value!r}")


def get_str(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise FormatError(f"Field {key!r} must be a string, got {type(value).__name__}")
    return str(value)


def get_date(raw: Dict[str, Any], *keys: str) -> Optional[date]:
    """Read a ``yyyy-MM-dd`` date from the first key present."""
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise FormatError(f"Field {key!r} must be a yyyy-MM-dd string")
        return parse_date(value)
    return None


def get_int_list(raw: Dict[str, Any], key: str) -> List[int]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise FormatError(f"Field {key!r} must be an array of integers")
    return [get_int({key: item}, key) for item in value]


def date_value(value: Optional[date]) -> Optional[str]:
    """Render a date for JSON, keeping ``None`` as null."""
    return format_date(value) if value is not None else None
