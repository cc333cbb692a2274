"""Utility functions for taxpj."""

from taxpj.utils.amount_parser import parse_amount, coerce_amount
from taxpj.utils.date_parser import competence_month, format_statement_date
from taxpj.utils.formatting import format_currency, format_fixed

__all__ = [
    "parse_amount",
    "coerce_amount",
    "competence_month",
    "format_statement_date",
    "format_currency",
    "format_fixed",
]
