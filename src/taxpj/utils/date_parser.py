"""Statement date utilities."""

from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser


MONTH_NAMES = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)

# Two defaults that differ in every field; a date parsed the same under both
# spelled out its own day, month and year
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def competence_month(raw: Optional[str]) -> Optional[str]:
    """Return the ``MM/YYYY`` competence key of a raw statement date.

    Only the first six characters are read. Dates that are missing or
    shorter than six characters have no competence month and yield None.
    """
    if not raw or len(raw) < 6:
        return None
    return f"{raw[4:6]}/{raw[0:4]}"


def month_label(month_year: str) -> str:
    """Turn ``MM/YYYY`` into a label such as ``Janeiro de 2024``."""
    month, year = month_year.split("/")
    try:
        name = MONTH_NAMES[int(month) - 1]
    except (ValueError, IndexError):
        name = month
    return f"{name} de {year}"


def format_statement_date(raw: str) -> str:
    """Format ``YYYYMMDD`` as ``DD/MM/YYYY``; other strings are returned as-is."""
    if raw and len(raw) == 8:
        return f"{raw[6:8]}/{raw[4:6]}/{raw[0:4]}"
    return raw


def short_date_to_statement(ddmmyy: str) -> str:
    """Convert a ``DDMMYY`` bank-layout date to ``YYYYMMDD``."""
    return f"20{ddmmyy[4:6]}{ddmmyy[2:4]}{ddmmyy[0:2]}"


def normalize_statement_date(raw: Optional[str]) -> str:
    """Normalise a date returned by an extractor to ``YYYYMMDD``.

    Digit-only strings (``YYYYMMDD`` or a truncated ``YYYYMM``) are kept.
    Other spellings ("2024-01-15", "15/01/2024") are parsed day-first.
    Partial dates ("15/01", "Jan 2024") and anything unparsable are
    returned unchanged; missing fields are never filled in.
    """
    if raw is None:
        return ""
    raw = raw.strip()
    # Digit-only strings are already in statement form, complete or not
    if not raw or raw.isdigit():
        return raw

    dayfirst = not _is_iso(raw)
    try:
        first, second = (
            date_parser.parse(raw, dayfirst=dayfirst, default=default)
            for default in _FILL_DEFAULTS
        )
    except (ValueError, OverflowError):
        return raw
    if first != second:
        return raw
    return first.strftime("%Y%m%d")


def _is_iso(raw: str) -> bool:
    return len(raw) >= 10 and raw[4] == "-" and raw[:4].isdigit()
