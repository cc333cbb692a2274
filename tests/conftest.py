"""Shared pytest fixtures for taxpj tests."""

import json
import os
import tempfile
from decimal import Decimal

import pytest

from taxpj.database.factories import create_sqlite_database
from taxpj.domain.entities import (
    AssetType,
    EntryType,
    Transaction,
    TransactionType,
)
from taxpj.domain.profile import ProfileService


class FakeModelClient:
    """Document model client returning a canned answer."""

    def __init__(self, payload=None, text=None):
        self.text = text if text is not None else json.dumps(payload)
        self.calls = []

    def generate_json(self, prompt, document, mime_type, system_instruction, response_schema):
        self.calls.append(
            {
                "prompt": prompt,
                "document": document,
                "mime_type": mime_type,
                "system_instruction": system_instruction,
                "response_schema": response_schema,
            }
        )
        return self.text


def _make_transaction(
    id="T1",
    date="20240115",
    amount="1000",
    entry_type=EntryType.REDEMPTION,
    yield_amount=None,
    irrf_retained=None,
    iof=None,
    profile_id="P1",
    description="CDB",
    asset_type=AssetType.RENDA_FIXA,
):
    """Build a transaction with sensible defaults."""
    return Transaction(
        id=id,
        import_id="IMPORT_1",
        profile_id=profile_id,
        source_file_name="extrato.pdf",
        date=date,
        description=description,
        amount=Decimal(amount),
        type=TransactionType.for_entry(entry_type),
        entry_type=entry_type,
        asset_type=asset_type,
        yield_amount=Decimal(yield_amount) if yield_amount is not None else None,
        irrf_retained=Decimal(irrf_retained) if irrf_retained is not None else None,
        iof=Decimal(iof) if iof is not None else None,
    )


@pytest.fixture
def model_client():
    """Return a factory for fake document model clients."""
    return FakeModelClient


@pytest.fixture
def make_transaction():
    """Return a factory for transactions."""
    return _make_transaction


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def sample_profile(profile_service):
    """Create a sample Banco do Brasil profile."""
    return profile_service.create_profile(
        bank_code="5",
        asset_code="120",
        liability_code="410",
        layout_type="BANCO_DO_BRASIL_INVEST",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def ofx_file(tmp_path):
    """Write a small OFX statement with one redemption and one application."""
    content = """OFXHEADER:100
<OFX><BANKMSGSRSV1><STMTTRNRS><STMTRS><BANKTRANLIST>
<STMTTRN>
<TRNTYPE>CREDIT
<DTPOSTED>20240115120000
<TRNAMT>500.00
<MEMO>Resgate CDB
</STMTTRN>
<STMTTRN>
<TRNTYPE>DEBIT
<DTPOSTED>20240120
<TRNAMT>-1000.00
<MEMO>Aplicacao CDB
</STMTTRN>
</BANKTRANLIST></STMTRS></STMTTRNRS></BANKMSGSRSV1></OFX>
"""
    path = tmp_path / "extrato.ofx"
    path.write_text(content, encoding="utf-8")
    return path
