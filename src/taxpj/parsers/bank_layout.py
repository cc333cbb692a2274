"""Fixed-width bank layout parser (Banco do Brasil statement files)."""

import uuid
from decimal import Decimal, InvalidOperation

from taxpj.domain.entities import (
    AssetType,
    EntryType,
    Transaction,
    TransactionType,
)
from taxpj.utils.amount_parser import estimate_yield
from taxpj.utils.date_parser import short_date_to_statement


BANK_LAYOUT_SENTINEL_ID = "INTERNAL_BB"
BANK_LAYOUT_SOURCE_NAME = "BB_LAYOUT_IMPORT"

MIN_LINE_LENGTH = 100
DETAIL_RECORD = "1"

# Field positions, zero-based and end-exclusive
CATEGORY = slice(42, 45)
DATE = slice(80, 86)
AMOUNT = slice(86, 104)
ENTRY_NUMBER = slice(135, 150)


def parse_bank_layout(content: str) -> list[Transaction]:
    """Parse the detail records of a fixed-width bank statement.

    Only lines of at least 100 characters starting with record type ``1``
    are read. Amounts are stored in cents; unreadable ones count as zero
    and, like any zero amount, are skipped.

    Args:
        content: Statement file text

    Returns:
        Transactions in file order
    """
    transactions = []

    for line in content.split("\n"):
        if len(line) < MIN_LINE_LENGTH:
            continue
        if line[0:1] != DETAIL_RECORD:
            continue

        category = line[CATEGORY].strip()
        amount = _parse_cents(line[AMOUNT].strip())
        if amount == 0:
            continue

        description = f"BB Categ {category} - Lanc {line[ENTRY_NUMBER].strip()}"
        entry_type = EntryType.REDEMPTION if amount > 0 else EntryType.APPLICATION

        transactions.append(
            Transaction(
                id=uuid.uuid4().hex,
                import_id=BANK_LAYOUT_SENTINEL_ID,
                profile_id=BANK_LAYOUT_SENTINEL_ID,
                source_file_name=BANK_LAYOUT_SOURCE_NAME,
                date=short_date_to_statement(line[DATE]),
                description=description.upper(),
                amount=abs(amount),
                type=TransactionType.for_entry(entry_type),
                entry_type=entry_type,
                asset_type=(
                    AssetType.RENDA_VARIAVEL
                    if category.startswith("2")
                    else AssetType.RENDA_FIXA
                ),
                yield_amount=estimate_yield(amount),
            )
        )

    return transactions


def _parse_cents(raw: str) -> Decimal:
    try:
        cents = Decimal(raw)
    except InvalidOperation:
        return Decimal("0")
    if not cents.is_finite():
        return Decimal("0")
    return cents / 100
