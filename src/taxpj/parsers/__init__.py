"""Text statement parsers for taxpj."""

from taxpj.parsers.ofx import parse_ofx
from taxpj.parsers.bank_layout import parse_bank_layout

__all__ = ["parse_ofx", "parse_bank_layout"]
