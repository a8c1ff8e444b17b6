"""Money helpers: Decimal conversion, cent rounding and display formatting.

Every amount in the SDK is a ``Decimal``. Floats are converted through
``str()`` so that ``0.1`` becomes ``Decimal("0.1")`` rather than the binary
approximation.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    """Convert an int, float, str or Decimal to Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    """Round to 2 decimal places, half-up.

    Example: 0.125 -> 0.13, 2.675 -> 2.68 (exact decimal, no binary drift)
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_plain(value: Number) -> str:
    """Shortest plain decimal string, no exponent and no trailing zeros.

    Used for export columns: 800.00 -> "800", 88.50 -> "88.5", 0.00 -> "0".
    """
    normalized = to_decimal(value).normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")


def format_currency(amount: Number) -> str:
    """Format as CNY with thousands separators, e.g. ¥10,000.00 or -¥5.50."""
    rounded = round2(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}¥{abs(rounded):,.2f}"
