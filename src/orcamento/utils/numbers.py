from __future__ import annotations

import math
from typing import Any

_NUMERIC_CHARS = frozenset("0123456789.-")


def normalize_number(value: Any) -> float:
    """Parse loosely formatted decimal text into a float.

    Accepts both "1.234,56" (comma decimal) and "1,234.56" (dot decimal).
    When the last comma comes after the last dot, dots are thousands
    separators and the comma is the decimal point. Anything that is not a
    digit, "." or "-" is then discarded. Returns 0 for empty or unparseable
    input; never raises.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return to_finite(value)
    s = str(value).strip()
    if not s:
        return 0.0
    s = s.replace("\u00a0", " ")
    if s.rfind(",") > s.rfind("."):
        s = s.replace(".", "").replace(",", ".", 1)
    s = "".join(ch for ch in s if ch in _NUMERIC_CHARS)
    try:
        n = float(s)
    except ValueError:
        return 0.0
    return n if math.isfinite(n) else 0.0


def to_finite(value: Any, default: float = 0.0) -> float:
    """Plain numeric coercion: non-numeric or non-finite values become ``default``."""
    if isinstance(value, bool):
        return float(value)
    try:
        n = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return n if math.isfinite(n) else default


def non_negative(value: Any) -> float:
    """Coerce to a finite number >= 0 (anything else becomes 0)."""
    n = to_finite(value)
    return n if n > 0 else 0.0
