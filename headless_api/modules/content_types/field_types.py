import math
import re
from datetime import datetime
from enum import Enum
from typing import Any, Union


class FieldType(str, Enum):
    TEXT = "Text"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"


# RFC 3339 date-time: full-date "T" full-time, offset mandatory
_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt ]([0-9]{2}):([0-9]{2}):([0-9]{2})(\.[0-9]+)?([Zz]|[+-][0-9]{2}:[0-9]{2})"
)


def is_rfc3339(value: str) -> bool:
    match = _RFC3339.fullmatch(value)
    if not match:
        return False
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # Leap second: only the last second of a minute may be 60
    if second == "60" and minute == "59":
        second = "59"
    # fromisoformat checks calendar and clock ranges; fraction normalized to microseconds
    fraction = "." + (fraction[1:] + "000000")[:6] if fraction else ""
    try:
        datetime.fromisoformat(f"{year}-{month}-{day}T{hour}:{minute}:{second}{fraction}{offset}")
    except ValueError:
        return False
    return True


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_date(value: Any) -> bool:
    return isinstance(value, str) and is_rfc3339(value)


_MATCHERS = {
    FieldType.TEXT: _is_text,
    FieldType.NUMBER: _is_number,
    FieldType.DATE: _is_date,
    FieldType.BOOLEAN: _is_boolean,
}


def matches(field_type: Union[FieldType, str], value: Any) -> bool:
    """True if `value` satisfies `field_type`. No coercion; unknown types never match."""
    try:
        field_type = FieldType(field_type)
    except ValueError:
        return False
    return _MATCHERS[field_type](value)
