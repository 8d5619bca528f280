"""Numeric formatting for nutrition values.

Totals are summed from many small floats, so they are rounded to a fixed
number of decimals before being compared against thresholds or shown to the
user. Rounding is half away from zero on the exact binary value of the
float, so ``2.675`` rounds to ``2.67`` (its binary value is just below the
midpoint) while ``2.5`` rounds to ``3``.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

# Floats at or above 2**52 carry no fractional part.
_INTEGRAL_LIMIT = 2.0**52
_PRECISION = 64


def to_number(value: object) -> float:
    """Coerce a loosely typed value to a finite float, defaulting to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float | Decimal):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def format_number(value: object, decimals: int = 2) -> float:
    """Round a value to ``decimals`` places and return it as a float."""
    number = to_number(value)
    if abs(number) >= _INTEGRAL_LIMIT:
        return number
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        quantum = Decimal(1).scaleb(-decimals)
        rounded = Decimal(number).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def format_display(value: object, decimals: int = 2) -> str:
    """Render a rounded value for text, dropping a trailing ``.0``."""
    rounded = format_number(value, decimals)
    if rounded.is_integer():
        return str(int(rounded))
    return str(rounded)
