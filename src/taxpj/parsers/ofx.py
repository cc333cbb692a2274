"""OFX statement parser."""

import re
import uuid

from taxpj.domain.entities import (
    AssetType,
    EntryType,
    Transaction,
    TransactionType,
)
from taxpj.utils.amount_parser import estimate_yield, parse_amount


OFX_SENTINEL_ID = "INTERNAL_OFX"
OFX_SOURCE_NAME = "OFX_IMPORT"
DEFAULT_MEMO = "Transação Financeira"

_STMTTRN = re.compile(r"<STMTTRN>([\s\S]*?)</STMTTRN>", re.IGNORECASE)
_DTPOSTED = re.compile(r"<DTPOSTED>([^<]*)", re.IGNORECASE)
_TRNAMT = re.compile(r"<TRNAMT>([^<]*)", re.IGNORECASE)
_MEMO = re.compile(r"<MEMO>([^<]*)", re.IGNORECASE)

# Checked in order; the first keyword hit decides
_ASSET_KEYWORDS = (
    (AssetType.RENDA_FIXA, ("cdb", "tesouro", "lci", "lca")),
    (AssetType.RENDA_VARIAVEL, ("ação", "stock", "trade")),
    (AssetType.FUNDOS_INVESTIMENTO, ("fundo", "invest")),
    (AssetType.FII, ("fii", "imob")),
    (AssetType.JCP, ("jcp", "juros s/")),
)


def identify_asset_type(description: str) -> AssetType:
    """Guess the asset class of a movement from its description."""
    lower = description.lower()
    for asset_type, keywords in _ASSET_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return asset_type
    return AssetType.RENDA_FIXA


def parse_ofx(content: str) -> list[Transaction]:
    """Parse the statement transactions of an OFX document.

    Blocks without a posted date or amount, and zero or unreadable amounts,
    are skipped. Positive amounts are redemptions, negative ones
    applications. OFX carries no yield detail, so yield is estimated.

    Args:
        content: OFX document text

    Returns:
        Transactions in document order
    """
    transactions = []

    for match in _STMTTRN.finditer(content):
        block = match.group(1)
        date_match = _DTPOSTED.search(block)
        amount_match = _TRNAMT.search(block)
        if date_match is None or amount_match is None:
            continue

        try:
            amount = parse_amount(amount_match.group(1))
        except ValueError:
            continue
        if amount == 0:
            continue

        memo_match = _MEMO.search(block)
        description = memo_match.group(1).strip() if memo_match else DEFAULT_MEMO
        entry_type = EntryType.REDEMPTION if amount > 0 else EntryType.APPLICATION

        transactions.append(
            Transaction(
                id=uuid.uuid4().hex,
                import_id=OFX_SENTINEL_ID,
                profile_id=OFX_SENTINEL_ID,
                source_file_name=OFX_SOURCE_NAME,
                date=date_match.group(1).strip()[:8],
                description=description.upper(),
                amount=abs(amount),
                type=TransactionType.for_entry(entry_type),
                entry_type=entry_type,
                asset_type=identify_asset_type(description),
                yield_amount=estimate_yield(amount),
            )
        )

    return transactions
