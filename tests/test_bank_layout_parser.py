"""Tests for the fixed-width bank layout parser."""

from decimal import Decimal

from taxpj.domain.entities import AssetType, EntryType
from taxpj.parsers.bank_layout import BANK_LAYOUT_SENTINEL_ID, parse_bank_layout


def detail_line(category="105", date="150124", amount="000000000000012345", entry="000000000012345", record="1"):
    """Build a 150-character detail record."""
    line = [" "] * 150
    line[0] = record
    line[42:45] = category
    line[80:86] = date
    line[86:104] = amount
    line[135:150] = entry
    return "".join(line)


def test_parses_detail_record():
    transactions = parse_bank_layout(detail_line())

    assert len(transactions) == 1
    txn = transactions[0]
    assert txn.date == "20240115"
    assert txn.amount == Decimal("123.45")
    assert txn.entry_type == EntryType.REDEMPTION
    assert txn.description == "BB CATEG 105 - LANC 000000000012345"
    assert txn.asset_type == AssetType.RENDA_FIXA
    assert txn.yield_amount == Decimal("12.345")
    assert txn.profile_id == BANK_LAYOUT_SENTINEL_ID


def test_negative_amount_is_application():
    txn = parse_bank_layout(detail_line(amount="-00000000000010000"))[0]

    assert txn.entry_type == EntryType.APPLICATION
    assert txn.amount == Decimal("100")


def test_variable_income_category():
    txn = parse_bank_layout(detail_line(category="210"))[0]

    assert txn.asset_type == AssetType.RENDA_VARIAVEL


def test_skips_headers_short_lines_and_zero_amounts():
    content = "\n".join(
        [
            detail_line(record="0"),
            "1" + " " * 50,
            detail_line(amount="000000000000000000"),
            detail_line(amount="XXXXXXXXXXXXXXXXXX"),
            detail_line(date="010224"),
            detail_line(record="9"),
        ]
    )

    transactions = parse_bank_layout(content)

    assert [t.date for t in transactions] == ["20240201"]
