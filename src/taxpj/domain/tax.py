"""Corporate tax on financial income.

Under Lucro Presumido, financial income enters the IRPJ and CSLL bases in
full. The IRRF withheld by the bank at redemption is credited against the
15% IRPJ; the surcharge and the CSLL are always due.
"""

from decimal import Decimal

from taxpj.domain.entities import AssetType, TaxCalculation, TaxRegime, Transaction
from taxpj.domain.errors import UnsupportedRegimeError, unsupported_regime


IRPJ_RATE = Decimal("0.15")
CSLL_RATE = Decimal("0.09")
SURCHARGE_RATE = Decimal("0.10")
SURCHARGE_THRESHOLD = Decimal("20000")

ZERO = Decimal("0")

LAW_REFERENCES = {
    "RENDA_FIXA": "Lei nº 11.033/2004 - Tabela Regressiva",
    "FUNDOS": "Lei nº 14.754/2023 - Nova Lei de Fundos",
    "RENDA_VARIAVEL": "Lei nº 9.430/1996 - Ganhos Líquidos",
    "IN_RFB": "IN RFB nº 1.585/2015",
    "JCP": "MPV nº 1.303/2025 (Alíquota 20%)",
}

ASSET_LAW_REFERENCES = {
    AssetType.RENDA_FIXA: LAW_REFERENCES["RENDA_FIXA"],
    AssetType.RENDA_VARIAVEL: LAW_REFERENCES["RENDA_VARIAVEL"],
    AssetType.FUNDOS_INVESTIMENTO: LAW_REFERENCES["FUNDOS"],
    AssetType.FII: LAW_REFERENCES["FUNDOS"],
    AssetType.JCP: LAW_REFERENCES["JCP"],
}


def calculate_tax(transaction: Transaction, regime: TaxRegime) -> TaxCalculation:
    """Calculate the tax due on a redemption.

    Only meaningful for REDEMPTION entries; callers filter. Values are not
    rounded here.

    Args:
        transaction: Redemption transaction
        regime: Tax regime of the company

    Returns:
        TaxCalculation for the transaction

    Raises:
        UnsupportedRegimeError: If the regime has no formula (Lucro Real)
    """
    if regime != TaxRegime.LUCRO_PRESUMIDO:
        raise UnsupportedRegimeError(unsupported_regime(TaxRegime(regime).value))

    gross_yield = transaction.yield_amount or ZERO
    irrf_retained = transaction.irrf_retained or ZERO

    irpj_base = gross_yield * IRPJ_RATE
    csll_amount = gross_yield * CSLL_RATE
    irpj_surcharge = max(ZERO, gross_yield - SURCHARGE_THRESHOLD) * SURCHARGE_RATE

    # Withheld IRRF only offsets the 15% IRPJ, never below zero
    irpj_after_credit = max(ZERO, irpj_base - irrf_retained)

    return TaxCalculation(
        transaction_id=transaction.id,
        gross_yield=gross_yield,
        irrf_amount=irrf_retained,
        irpj_base=irpj_base,
        irpj_surcharge=irpj_surcharge,
        csll_amount=csll_amount,
        net_to_pay=irpj_after_credit + irpj_surcharge + csll_amount,
        law_reference=ASSET_LAW_REFERENCES.get(
            transaction.asset_type, LAW_REFERENCES["RENDA_FIXA"]
        ),
    )
