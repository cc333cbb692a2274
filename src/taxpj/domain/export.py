"""Semicolon-delimited tax report for the accounting system."""

import csv
import io
from typing import Iterable

from taxpj.domain.entities import CompetenceDate, TaxCalculation, Transaction
from taxpj.domain.errors import ValidationError
from taxpj.utils.formatting import format_fixed


EXPORT_HEADER = (
    "Data",
    "Historico",
    "Rendimento_Bruto",
    "IRRF_Extrato",
    "IRPJ_15",
    "CSLL_9",
    "DARF_Final",
)


def generate_export(
    transactions: Iterable[Transaction], calculations: Iterable[TaxCalculation]
) -> str:
    """Render the tax report.

    One row per transaction that has a calculation; transactions without
    one (applications) are left out. Monetary columns carry two decimals.

    Args:
        transactions: Transactions in report order
        calculations: Tax calculations, matched to transactions by id

    Returns:
        Report text, one line per row, ``\\n`` terminated
    """
    calcs_by_id = {calc.transaction_id: calc for calc in calculations}

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(EXPORT_HEADER)

    for txn in transactions:
        calc = calcs_by_id.get(txn.id)
        if calc is None:
            continue
        writer.writerow(
            [
                _export_date(txn.date),
                txn.description,
                format_fixed(calc.gross_yield),
                format_fixed(calc.irrf_amount),
                format_fixed(calc.irpj_base),
                format_fixed(calc.csll_amount),
                format_fixed(calc.net_to_pay),
            ]
        )

    return buffer.getvalue()


def _export_date(raw: str) -> str:
    try:
        return CompetenceDate.parse(raw).display
    except ValidationError:
        return raw
