"""
Message rendering for violations and the early-exit signal.

Templates use ``%{expected}``, ``%{attribute}``, ``%{property}`` and
``%{actual}`` placeholders (matched case-insensitively). Unknown
placeholders and absent values render as the empty string.
"""

import json
import re
from typing import Any, Dict, Optional

from .schema import MISSING, Schema

_PLACEHOLDER = re.compile(r"%\{([a-z]+)\}", re.IGNORECASE)


def render_value(value: Any) -> str:
    """Text form of a value as it appears inside messages."""
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(v) for v in value)
    if isinstance(value, re.Pattern):
        return value.pattern
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if callable(value):
        return getattr(value, "__name__", repr(value))
    return str(value)


def format_message(template: str, lookup: Dict[str, Any]) -> str:
    """Substitute placeholders in ``template`` from ``lookup``."""
    return _PLACEHOLDER.sub(
        lambda match: render_value(lookup.get(match.group(1).lower())),
        template,
    )


def resolve_template(
    attribute: str,
    schema: Schema,
    default_template: str,
    override: Optional[str] = None,
) -> str:
    """
    Pick the template for a violation.

    Priority: explicit override, ``schema.messages[attribute]``,
    ``schema.message``, then the registry default.
    """
    return (
        override
        or schema.messages.get(attribute)
        or schema.message
        or default_template
    )


def signal_value(value: Any) -> str:
    """
    Text form of a value inside the early-exit signal.

    Unlike template rendering, an absent value reads ``undefined``, ``None``
    reads ``null`` and integral floats drop their ``.0``.
    """
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None or v is MISSING else signal_value(v) for v in value)
    return render_value(value)


def signal_message(attribute: str, prop: str, expected: Any, actual: Any, message: str) -> str:
    """Attribute-specific text of the early-exit signal."""
    if attribute in ("required", "type", "minLength", "maxLength", "minimum", "maximum"):
        return f'Property "{prop}" {message}'
    if attribute == "enum":
        return (
            f'Property "{prop}" {message}: '
            f'{json.dumps(expected, separators=(",", ":"), default=str)}, '
            f'actual value "{signal_value(actual)}"'
        )
    if attribute == "additionalProperties":
        return f'Property "{prop}" is unexpected'
    return (
        f"Attribute `{attribute}` of property `{prop}` hasn`t pass check, "
        f"expected value: `{signal_value(expected)}` actual value: `{signal_value(actual)}` "
        f"error message: `{message}`"
    )
