"""Presentation helpers for monetary values."""

from decimal import Decimal, ROUND_HALF_UP


CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a monetary value to two decimals (half up)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_fixed(value: Decimal) -> str:
    """Format a monetary value with exactly two decimals, e.g. ``1234.50``."""
    return f"{to_cents(value):.2f}"


def format_currency(value: Decimal) -> str:
    """Format a value the Brazilian way, e.g. ``R$ 1.234,50``."""
    rendered = f"{to_cents(value):,.2f}"
    rendered = rendered.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {rendered}"
