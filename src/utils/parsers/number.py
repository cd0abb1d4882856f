"""
Number parsing utilities.

Parse free-text numeric inputs (area in 坪, price in 萬, ids) and format them back.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional


def is_blank(value: Any) -> bool:
    """Return True for None or a string that is empty after trimming."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric input into a float.

    Args:
        value: Raw input (e.g., "25.5", "1,200", 40, None)

    Returns:
        Float value or None when blank or unparseable

    Examples:
        >>> parse_number("25.5")
        25.5
        >>> parse_number("1,200")
        1200.0
        >>> parse_number("")
        None
        >>> parse_number("abc")
        None
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an integer id.

    Args:
        value: Raw input (e.g., "1718000000000", 42)

    Returns:
        Integer or None when blank or not an integer

    Examples:
        >>> parse_int("1718000000000")
        1718000000000
        >>> parse_int("12.5")
        None
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def round_half_up(value: float, digits: int = 2) -> float:
    """
    Round to a fixed number of decimals, halves away from zero.

    Works on the shortest decimal representation of the float,
    so 12.345 rounds to 12.35.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # quantize needs every integer digit plus the decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        return float(exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP))


def format_number(value: Optional[float]) -> str:
    """
    Format a number the way it would be typed into a form.

    Examples:
        >>> format_number(40.0)
        "40"
        >>> format_number(25.5)
        "25.5"
        >>> format_number(None)
        ""
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
