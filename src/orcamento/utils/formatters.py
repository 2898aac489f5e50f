from __future__ import annotations

import math
from typing import Any


def format_brl(value: Any) -> str:
    """Format a number as R$ X.XXX,XX.

    Non-numeric or non-finite input renders as R$ 0,00.
    """
    try:
        n = float(value)
    except (TypeError, ValueError, OverflowError):
        return "R$ 0,00"
    if not math.isfinite(n):
        return "R$ 0,00"
    try:
        formatted = f"{abs(n):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    except (ValueError, OverflowError):
        return f"R$ {n:.2f}"
    sign = "-" if n < 0 and round(abs(n), 2) != 0 else ""
    return f"{sign}R$ {formatted}"
