"""Tests for the Lucro Presumido tax calculation."""

from decimal import Decimal

import pytest

from taxpj.domain.entities import AssetType, TaxRegime
from taxpj.domain.errors import DomainError, UnsupportedRegimeError
from taxpj.domain.tax import LAW_REFERENCES, calculate_tax


def test_irrf_offsets_irpj(make_transaction):
    """Test the withheld IRRF is credited against the 15% IRPJ."""
    txn = make_transaction(yield_amount="80", irrf_retained="12")

    calc = calculate_tax(txn, TaxRegime.LUCRO_PRESUMIDO)

    assert calc.transaction_id == "T1"
    assert calc.gross_yield == Decimal("80")
    assert calc.irpj_base == Decimal("12.00")
    assert calc.csll_amount == Decimal("7.20")
    assert calc.irpj_surcharge == Decimal("0")
    assert calc.net_to_pay == Decimal("7.20")


def test_irrf_larger_than_irpj_never_goes_negative(make_transaction):
    txn = make_transaction(yield_amount="100", irrf_retained="22.5")

    calc = calculate_tax(txn, TaxRegime.LUCRO_PRESUMIDO)

    # IRPJ 15.00 is fully offset; only CSLL remains
    assert calc.net_to_pay == Decimal("9.00")


def test_surcharge_above_threshold(make_transaction):
    """Test the 10% surcharge applies to yield above 20,000."""
    txn = make_transaction(yield_amount="25000", irrf_retained="0")

    calc = calculate_tax(txn, TaxRegime.LUCRO_PRESUMIDO)

    assert calc.irpj_base == Decimal("3750.00")
    assert calc.irpj_surcharge == Decimal("500.0")
    assert calc.csll_amount == Decimal("2250.00")
    assert calc.net_to_pay == Decimal("6500.00")


def test_surcharge_is_not_offset_by_irrf(make_transaction):
    txn = make_transaction(yield_amount="30000", irrf_retained="10000")

    calc = calculate_tax(txn, TaxRegime.LUCRO_PRESUMIDO)

    # IRPJ 4500 fully offset, surcharge 1000 and CSLL 2700 still due
    assert calc.net_to_pay == Decimal("3700.00")


def test_missing_yield_and_irrf_count_as_zero(make_transaction):
    txn = make_transaction()

    calc = calculate_tax(txn, TaxRegime.LUCRO_PRESUMIDO)

    assert calc.gross_yield == Decimal("0")
    assert calc.irrf_amount == Decimal("0")
    assert calc.net_to_pay == Decimal("0")


def test_law_reference_follows_asset_type(make_transaction):
    fixed = calculate_tax(make_transaction(yield_amount="10"), TaxRegime.LUCRO_PRESUMIDO)
    fund = calculate_tax(
        make_transaction(yield_amount="10", asset_type=AssetType.FUNDOS_INVESTIMENTO),
        TaxRegime.LUCRO_PRESUMIDO,
    )

    assert fixed.law_reference == LAW_REFERENCES["RENDA_FIXA"]
    assert fund.law_reference == LAW_REFERENCES["FUNDOS"]


def test_lucro_real_is_not_supported(make_transaction):
    txn = make_transaction(yield_amount="80", irrf_retained="12")

    with pytest.raises(UnsupportedRegimeError):
        calculate_tax(txn, TaxRegime.LUCRO_REAL)


def test_unsupported_regime_is_a_domain_error():
    assert issubclass(UnsupportedRegimeError, DomainError)
    assert issubclass(UnsupportedRegimeError, NotImplementedError)
