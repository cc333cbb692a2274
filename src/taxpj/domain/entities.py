"""Domain model entities for taxpj.

These are pure data classes representing business concepts, independent of
how statements are parsed or how profiles are stored.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from taxpj.domain.errors import ValidationError


PENDING_PROFILE_ID = "PENDING"


@dataclass(frozen=True)
class CompetenceDate:
    """A fully resolved statement date (``YYYYMMDD``)."""

    value: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "CompetenceDate":
        """Build a competence date from an 8-digit string.

        Raises:
            ValidationError: If the string is not exactly 8 digits
        """
        if raw is None or len(raw) != 8 or not raw.isdigit():
            raise ValidationError(f"Invalid statement date '{raw}': expected YYYYMMDD")
        return cls(raw)

    @property
    def year(self) -> str:
        return self.value[0:4]

    @property
    def month(self) -> str:
        return self.value[4:6]

    @property
    def day(self) -> str:
        return self.value[6:8]

    @property
    def month_key(self) -> str:
        return f"{self.month}/{self.year}"

    @property
    def display(self) -> str:
        return f"{self.day}/{self.month}/{self.year}"


class EntryType(str, Enum):
    """Movement of money in or out of an investment."""

    APPLICATION = "APPLICATION"
    REDEMPTION = "REDEMPTION"


class TransactionType(str, Enum):
    """Bookkeeping direction derived from the entry type."""

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"

    @classmethod
    def for_entry(cls, entry_type: EntryType) -> "TransactionType":
        return cls.DEBIT if entry_type == EntryType.APPLICATION else cls.CREDIT


class AssetType(str, Enum):
    """Asset classification tag."""

    RENDA_FIXA = "RENDA_FIXA"
    RENDA_VARIAVEL = "RENDA_VARIAVEL"
    FUNDOS_INVESTIMENTO = "FUNDOS_INVESTIMENTO"
    FII = "FII"
    JCP = "JCP"


class TaxRegime(str, Enum):
    """Corporate tax regimes."""

    LUCRO_REAL = "LUCRO_REAL"
    LUCRO_PRESUMIDO = "LUCRO_PRESUMIDO"


class LayoutType(str, Enum):
    """Statement layouts a bank profile can be bound to."""

    BRADESCO_INVEST_FACIL = "BRADESCO_INVEST_FACIL"
    CAIXA_FIC_GIRO = "CAIXA_FIC_GIRO"
    BANCO_DO_BRASIL_INVEST = "BANCO_DO_BRASIL_INVEST"
    GENERIC_INVESTMENT = "GENERIC_INVESTMENT"

    @property
    def display_name(self) -> str:
        return LAYOUT_NAMES[self]

    @property
    def bank_name(self) -> str:
        return LAYOUT_TO_BANK_NAME[self]

    @property
    def is_generic(self) -> bool:
        return self == LayoutType.GENERIC_INVESTMENT


LAYOUT_NAMES = {
    LayoutType.BRADESCO_INVEST_FACIL: "Bradesco Invest Fácil",
    LayoutType.CAIXA_FIC_GIRO: "Caixa FIC Giro",
    LayoutType.BANCO_DO_BRASIL_INVEST: "Banco do Brasil - Investimentos",
    LayoutType.GENERIC_INVESTMENT: "Layout Genérico / Outros",
}

LAYOUT_TO_BANK_NAME = {
    LayoutType.BRADESCO_INVEST_FACIL: "BRADESCO",
    LayoutType.CAIXA_FIC_GIRO: "CAIXA ECONÔMICA",
    LayoutType.BANCO_DO_BRASIL_INVEST: "BANCO DO BRASIL",
    LayoutType.GENERIC_INVESTMENT: "OUTROS",
}


@dataclass(frozen=True)
class Transaction:
    """Canonical record of one financial movement.

    Monetary fields are non-negative; the direction lives in ``type`` and
    ``entry_type``. ``date`` is kept as the raw ``YYYYMMDD`` string the
    statement produced.
    """

    id: str
    import_id: str
    profile_id: str
    source_file_name: str
    date: str
    description: str
    amount: Decimal
    type: TransactionType
    entry_type: EntryType
    asset_type: AssetType = AssetType.RENDA_FIXA
    yield_amount: Optional[Decimal] = None
    irrf_retained: Optional[Decimal] = None
    iof: Optional[Decimal] = None
    bank_name: Optional[str] = None
    bank_account: Optional[str] = None


@dataclass(frozen=True)
class TaxCalculation:
    """Tax due on one redemption."""

    transaction_id: str
    gross_yield: Decimal
    irrf_amount: Decimal
    irpj_base: Decimal
    irpj_surcharge: Decimal
    csll_amount: Decimal
    net_to_pay: Decimal
    law_reference: str


@dataclass(frozen=True)
class ConfigProfile:
    """Bank profile mapping a statement layout to a chart of accounts."""

    id: str
    name: str
    bank_code: str
    asset_code: str
    liability_code: str
    layout_type: LayoutType


REMOVED_BANK_PROFILE = ConfigProfile(
    id="",
    name="BANCO REMOVIDO",
    bank_code="?",
    asset_code="?",
    liability_code="?",
    layout_type=LayoutType.GENERIC_INVESTMENT,
)


@dataclass(frozen=True)
class DashboardStats:
    """Summary figures for a month or for the whole transaction set."""

    total_invested: Decimal = Decimal("0")
    total_yield: Decimal = Decimal("0")
    total_irrf: Decimal = Decimal("0")
    total_irpj: Decimal = Decimal("0")
    total_csll: Decimal = Decimal("0")
    final_tax_balance: Decimal = Decimal("0")

    def __add__(self, other: "DashboardStats") -> "DashboardStats":
        return DashboardStats(
            total_invested=self.total_invested + other.total_invested,
            total_yield=self.total_yield + other.total_yield,
            total_irrf=self.total_irrf + other.total_irrf,
            total_irpj=self.total_irpj + other.total_irpj,
            total_csll=self.total_csll + other.total_csll,
            final_tax_balance=self.final_tax_balance + other.final_tax_balance,
        )


@dataclass(frozen=True)
class MonthlyGroup:
    """Transactions of one competence month with their summary."""

    month_year: str
    label: str
    transactions: tuple[Transaction, ...]
    stats: DashboardStats


class LedgerLineKind(str, Enum):
    """Which part of a movement a ledger line books."""

    APPLICATION = "APPLICATION"
    PRINCIPAL = "PRINCIPAL"
    YIELD = "YIELD"
    IRRF = "IRRF"
    IOF = "IOF"


@dataclass(frozen=True)
class LedgerLine:
    """One debit/credit accounting entry."""

    transaction_id: str
    date: str
    debit: str
    credit: str
    history: str
    amount: Decimal
    kind: LedgerLineKind


@dataclass(frozen=True)
class LedgerSection:
    """Ledger lines of one bank profile within one competence month."""

    month_year: str
    label: str
    profile: ConfigProfile
    lines: tuple[LedgerLine, ...]


@dataclass(frozen=True)
class ImportRecord:
    """Outcome of importing a single file."""

    id: str
    file_name: str
    timestamp: float
    count: int
    profile_name: str


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing a batch of files."""

    import_id: str
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    records: tuple[ImportRecord, ...] = field(default_factory=tuple)
