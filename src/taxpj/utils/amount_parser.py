"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a statement amount string into a Decimal.

    Handles the formats found in statement files:
    - "123.45"
    - "-123.45"
    - "123,45" (the first comma is read as the decimal separator)
    - "123.45 BRL" (trailing text after the number is ignored)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip().replace(",", ".", 1)

    match = _LEADING_NUMBER.match(amount_str)
    if match is None:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    try:
        return Decimal(match.group(0))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")


def coerce_amount(value: object) -> Decimal:
    """Coerce a loosely typed value to a non-negative Decimal.

    Numbers and numeric strings become their absolute value; anything else
    (None, booleans, text, NaN) becomes zero.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, (int, float)):
        value = str(value)
    if isinstance(value, str):
        if not value.strip():
            return Decimal("0")
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return Decimal("0")
        if not amount.is_finite():
            return Decimal("0")
        return abs(amount)
    if isinstance(value, Decimal):
        return abs(value) if value.is_finite() else Decimal("0")
    return Decimal("0")


def estimate_yield(amount: Decimal) -> Decimal:
    """Estimate the yield of a movement as 10% of its amount.

    Text statements carry no yield or withholding detail, so this is a
    placeholder figure rather than a measured one.
    """
    return abs(amount) * Decimal("0.1")
