"""
Built-in string formats.

Each format is either a compiled regular expression (matched with
``search``) or a predicate taking the value. CORE_FORMATS is always
consulted; FORMAT_EXTENSIONS is consulted first when
``validate_format_extensions`` is enabled.
"""

import re
from typing import Any, Callable, Dict, Pattern, Union

FormatSpec = Union[Pattern, Callable[[Any], bool]]

_UCS = "\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF"

_EMAIL = (
    r"^((([a-z]|\d|[!#\$%&'\*\+\-\/=\?\^_`{\|}~]|[" + _UCS + r"])+"
    r"(\.([a-z]|\d|[!#\$%&'\*\+\-\/=\?\^_`{\|}~]|[" + _UCS + r"])+)*)"
    r"|((\x22)((((\x20|\x09)*(\x0d\x0a))?(\x20|\x09)+)?"
    r"(([\x01-\x08\x0b\x0c\x0e-\x1f\x7f]|\x21|[\x23-\x5b]|[\x5d-\x7e]|[" + _UCS + r"])"
    r"|(\\([\x01-\x09\x0b\x0c\x0d-\x7f]|[" + _UCS + r"]))))*"
    r"(((\x20|\x09)*(\x0d\x0a))?(\x20|\x09)+)?(\x22)))"
    r"@((([a-z]|\d|[" + _UCS + r"])|(([a-z]|\d|[" + _UCS + r"])"
    r"([a-z]|\d|-|\.|_|~|[" + _UCS + r"])*([a-z]|\d|[" + _UCS + r"])))\.)+"
    r"(([a-z]|[" + _UCS + r"])|(([a-z]|[" + _UCS + r"])"
    r"([a-z]|\d|-|\.|_|~|[" + _UCS + r"])*([a-z]|[" + _UCS + r"])))\.?$"
)

_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"

_RGB_CHANNEL = r"(\d{1,2}|[01][0-9][0-9]|2[0-4][0-9]|25[0-5])"

_COLOR = (
    r"^(#([0-9a-f]{3}){1,2}"
    r"|rgb\((\s*" + _RGB_CHANNEL + r"\s*,){2}\s*" + _RGB_CHANNEL + r"\s*\)"
    r"|aqua|black|blue|fuchsia|gray|green|lime|maroon|navy|olive|orange"
    r"|purple|red|silver|teal|white|yellow)$"
)

_URL_CHAR = r"([a-z]|\d|-|\.|_|~|[" + _UCS + r"])"
_URL_ALNUM = r"([a-z]|\d|[" + _UCS + r"])"
_URL_ALPHA = r"([a-z]|[" + _UCS + r"])"
_URL_DEC_OCTET = r"(\d|[1-9]\d|1\d\d|2[0-4]\d|25[0-5])"
_URL_PCHAR = _URL_CHAR + r"|(%[\da-f]{2})|[!\$&'\(\)\*\+,;=]|:|@"

_URL = (
    r"^(https?|ftp|git):\/\/"
    r"(((" + _URL_CHAR + r"|(%[\da-f]{2})|[!\$&'\(\)\*\+,;=]|:)*@)?"
    r"((" + _URL_DEC_OCTET + r"\." + _URL_DEC_OCTET + r"\." + _URL_DEC_OCTET + r"\." + _URL_DEC_OCTET + r")"
    r"|((" + _URL_ALNUM + r"|(" + _URL_ALNUM + _URL_CHAR + r"*" + _URL_ALNUM + r"))\.)+"
    r"(" + _URL_ALPHA + r"|(" + _URL_ALPHA + _URL_CHAR + r"*" + _URL_ALPHA + r"))\.?)"
    r"(:\d*)?)"
    r"(\/((" + _URL_PCHAR + r")+(\/((" + _URL_PCHAR + r"))*)*)?)?"
    r"(\?((" + _URL_PCHAR + r")|[\uE000-\uF8FF]|\/|\?)*)?"
    r"(\#((" + _URL_PCHAR + r")|\/|\?)*)?$"
)


def _is_utc_millisec(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _is_regex(value: Any) -> bool:
    try:
        re.compile(value)
    except (re.error, TypeError):
        return False
    return True


CORE_FORMATS: Dict[str, FormatSpec] = {
    "email": re.compile(_EMAIL, re.IGNORECASE),
    "ip-address": re.compile(
        r"^" + r"\.".join([_OCTET] * 4) + r"$", re.IGNORECASE
    ),
    "ipv6": re.compile(r"^([0-9A-Fa-f]{1,4}:){7}[0-9A-Fa-f]{1,4}$"),
    "date-time": re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:.\d{1,3})?Z$"),
    "date": re.compile(r"^\d{4}-\d{2}-\d{2}$"),
    "time": re.compile(r"^\d{2}:\d{2}:\d{2}$"),
    "color": re.compile(_COLOR, re.IGNORECASE),
    "host-name": re.compile(
        r"^(([a-zA-Z]|[a-zA-Z][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*"
        r"([A-Za-z]|[A-Za-z][A-Za-z0-9\-]*[A-Za-z0-9])"
    ),
    "utc-millisec": _is_utc_millisec,
    "regex": _is_regex,
}

FORMAT_EXTENSIONS: Dict[str, FormatSpec] = {
    "url": re.compile(_URL, re.IGNORECASE),
}


def check_format(spec: FormatSpec, value: Any) -> bool:
    """Apply a format spec (pattern or predicate) to a value."""
    search = getattr(spec, "search", None)
    if search is not None:
        return isinstance(value, str) and search(value) is not None
    return bool(spec(value))
