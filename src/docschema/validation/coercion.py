"""
Best-effort type coercion applied before constraint checks.

Coercion never forces a value: input that cannot be converted is returned
unchanged and is left for the type check to reject.

- integer/number: numeric strings become int or float ("42" -> 42, "42.2" -> 42.2)
- boolean: "true", "1", 1 -> True; "false", "0", 0 -> False
- date: ISO-8601 and a few textual forms, epoch milliseconds
"""

import math
from datetime import date, datetime, timezone
from typing import Any, Optional

# Textual date forms accepted besides ISO-8601
DATE_FORMATS = (
    "%b %d %Y",
    "%B %d %Y",
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
    "%b %d %Y %H:%M:%S",
    "%d %b %Y",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
)


def cast_value(value: Any, type_name: Optional[str]) -> Any:
    """Convert ``value`` towards ``type_name`` if it can be done losslessly."""
    if type_name in ("integer", "number"):
        return _cast_number(value, type_name)
    if type_name == "boolean":
        return _cast_boolean(value)
    if type_name == "date":
        return _cast_date(value)
    return value


def differs(left: Any, right: Any) -> bool:
    """True when two values differ in type or value (1 and True differ)."""
    return type(left) is not type(right) or left != right


def _cast_number(value: Any, type_name: str) -> Any:
    if not isinstance(value, str):
        return value
    text = value.strip()
    # int() and float() accept digit separators
    if "_" in text:
        return value
    try:
        number: Any = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return value
        if not math.isfinite(number):
            return value
        if type_name == "integer" and number.is_integer():
            number = int(number)
    return number


def _cast_boolean(value: Any) -> Any:
    if isinstance(value, str):
        if value in ("true", "1"):
            return True
        if value in ("false", "0"):
            return False
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value == 1:
            return True
        if value == 0:
            return False
    return value


def _cast_date(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return value
    if not isinstance(value, str):
        return value

    text = value.strip()
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return value
