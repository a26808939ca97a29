"""
Display formatting helpers.
"""

from decimal import Decimal, ROUND_HALF_UP

CURRENCY_SUFFIX = "đ"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
MAX_FRACTION_DIGITS = 3


def format_price(amount: Decimal | int | float | str) -> str:
    """
    Format an amount the way vi-VN number formatting does, suffixed with đ.

    Groups thousands with ".", uses "," before up to three fraction digits
    and drops trailing zeros.

    >>> format_price(129900)
    '129.900đ'
    >>> format_price(Decimal("1500.50"))
    '1.500,5đ'
    """
    value = Decimal(str(amount)).quantize(
        Decimal(1).scaleb(-MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP
    )

    sign = "-" if value < 0 else ""
    integer_part, _, fraction_part = f"{abs(value):f}".partition(".")
    fraction_part = fraction_part.rstrip("0")

    grouped = f"{int(integer_part):,}".replace(",", THOUSANDS_SEPARATOR)
    if fraction_part:
        grouped = f"{grouped}{DECIMAL_SEPARATOR}{fraction_part}"

    return f"{sign}{grouped}{CURRENCY_SUFFIX}"
