from __future__ import annotations

import math
import re

from ..models.typed_value import TypedValue

"""Value coercion: raw field string -> TypedValue.

Fixed precedence, pure and total:

1. ``""``                       -> STRING("")
2. full decimal numeric literal -> INTEGER if no fractional part, else FLOAT
3. "true" / "false" (any case)  -> BOOLEAN
4. anything else                -> STRING(raw) unchanged

"Numeric" means the whole (trimmed) string is a decimal literal: an optional
sign, digits with an optional fraction, and an optional exponent. ``float()``
alone is too permissive here (it accepts ``inf``, ``nan`` and ``1_000``).
"""

__all__ = [
    "coerce",
    "is_numeric",
]

_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_BOOLEANS = {"true": True, "false": False}


def is_numeric(raw: str) -> bool:
    return _NUMERIC_RE.fullmatch(raw.strip()) is not None


def _coerce_number(text: str) -> TypedValue | None:
    if _INTEGER_RE.fullmatch(text):
        # int() keeps full precision for long digit strings
        try:
            return TypedValue.integer(int(text))
        except ValueError:
            # past the int string conversion digit limit
            return None
    number = float(text)
    if not math.isfinite(number):
        # exponent overflow (e.g. "1e999")
        return None
    if number.is_integer():
        return TypedValue.integer(int(number))
    return TypedValue.float_(number)


def coerce(raw: str) -> TypedValue:
    """Map a raw field string to exactly one TypedValue."""
    if raw == "":
        return TypedValue.string("")

    text = raw.strip()
    if _NUMERIC_RE.fullmatch(text):
        value = _coerce_number(text)
        if value is not None:
            return value

    flag = _BOOLEANS.get(text.lower())
    if flag is not None:
        return TypedValue.boolean(flag)

    return TypedValue.string(raw)
