"""Lenient number parsing and text coercion used by the built-in set.

Parsing follows the prefix rules of browser parseInt/parseFloat: leading
whitespace and a sign are accepted and trailing text is ignored, so
"  42px" parses as 42.
"""

import math
import re
from typing import Any, Optional

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_int(text: str) -> Optional[int]:
    """Leading base-10 integer of text, or None when there is none."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_float(text: str) -> Optional[float]:
    """Leading decimal number of text, or None when there is none."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    number = match.group(1)
    if number.lstrip("+-") == "Infinity":
        return -math.inf if number.startswith("-") else math.inf
    return float(number)


def to_text(value: Any) -> str:
    """Coerce any chain value to text.

    None -> "null", booleans -> "true"/"false", integral floats drop
    their fraction, sequences join their items with commas (None items
    become empty), everything else (nodes included) uses str().
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_text(item) for item in value)
    return str(value)
