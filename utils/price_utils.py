"""
Currency helpers for Merchant API prices.

Prices are submitted as micros: integer strings equal to the decimal
amount times 1,000,000.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

MICROS_PER_UNIT = Decimal("1000000")


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a price-like value into a finite Decimal.

    Accepts Decimal, int, float and numeric strings ("12.50", " 3 ").
    Returns None for None, booleans, empty strings, unparsable text,
    NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except (InvalidOperation, ValueError):
            return None

    if not amount.is_finite():
        return None

    return amount


def to_micros(amount: Any) -> str:
    """
    Convert a decimal amount into a micros string.

    round(amount × 1,000,000), half-up. Missing or unparsable amounts
    count as zero.

    Examples:
        19.99 → "19990000"
        Decimal("0.0000005") → "1"
        None → "0"
    """
    value = parse_decimal(amount)
    if value is None:
        value = Decimal("0")

    micros = (value * MICROS_PER_UNIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return str(int(micros))


def format_amount(amount: Any) -> str:
    """
    Render an amount for template text ("{{price}}").

    Trailing zeros are kept as the source had them; None → "".
    """
    value = parse_decimal(amount)
    if value is None:
        return ""
    return format(value, "f")
