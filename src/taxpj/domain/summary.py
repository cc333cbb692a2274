"""Monthly summary domain service."""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from taxpj.domain.entities import (
    DashboardStats,
    EntryType,
    MonthlyGroup,
    TaxCalculation,
    TaxRegime,
    Transaction,
)
from taxpj.domain.tax import IRPJ_RATE, ZERO, calculate_tax
from taxpj.utils.date_parser import competence_month, month_label


@dataclass(frozen=True)
class DarfMemoryLine:
    """One line of the DARF calculation memory of a month."""

    label: str
    amount: Decimal
    emphasis: bool = False


class SummaryService:
    """Service for grouping transactions by competence month."""

    regime = TaxRegime.LUCRO_PRESUMIDO

    def group_by_month(self, transactions: Iterable[Transaction]) -> list[MonthlyGroup]:
        """Group transactions into competence months.

        Transactions without a usable date (missing or shorter than six
        characters) are left out of every group.

        Args:
            transactions: Transactions to group

        Returns:
            Monthly groups sorted by year, then month
        """
        grouped = self.group_transactions_by_period(transactions)

        groups = [
            MonthlyGroup(
                month_year=month_year,
                label=month_label(month_year),
                transactions=tuple(sorted(txns, key=lambda txn: txn.date)),
                stats=self.build_month_stats(txns),
            )
            for month_year, txns in grouped.items()
        ]
        return sorted(groups, key=self._period_sort_key)

    def group_transactions_by_period(
        self, transactions: Iterable[Transaction]
    ) -> dict[str, list[Transaction]]:
        """Bucket transactions by their ``MM/YYYY`` key, in input order."""
        period_transactions: dict[str, list[Transaction]] = defaultdict(list)

        for txn in transactions:
            period_key = competence_month(txn.date)
            if period_key is None:
                continue
            period_transactions[period_key].append(txn)

        return dict(period_transactions)

    def build_month_stats(self, transactions: Sequence[Transaction]) -> DashboardStats:
        """Summarise one month.

        IRRF is netted against the month's total IRPJ (base plus surcharge),
        not transaction by transaction.
        """
        calcs = self.calculations(transactions)

        total_yield = sum((c.gross_yield for c in calcs), ZERO)
        total_irrf = sum((c.irrf_amount for c in calcs), ZERO)
        total_irpj_gross = sum((c.irpj_base for c in calcs), ZERO)
        total_surcharge = sum((c.irpj_surcharge for c in calcs), ZERO)
        total_csll = sum((c.csll_amount for c in calcs), ZERO)
        irpj_net = max(ZERO, (total_irpj_gross + total_surcharge) - total_irrf)

        total_invested = sum(
            (txn.amount for txn in transactions if txn.entry_type == EntryType.APPLICATION),
            ZERO,
        )

        return DashboardStats(
            total_invested=total_invested,
            total_yield=total_yield,
            total_irrf=total_irrf,
            total_irpj=irpj_net,
            total_csll=total_csll,
            final_tax_balance=irpj_net + total_csll,
        )

    def calculations(self, transactions: Iterable[Transaction]) -> list[TaxCalculation]:
        """Calculate tax for every redemption, in input order."""
        return [
            calculate_tax(txn, self.regime)
            for txn in transactions
            if txn.entry_type == EntryType.REDEMPTION
        ]

    def global_stats(self, groups: Iterable[MonthlyGroup]) -> DashboardStats:
        """Add up the summaries of all months."""
        total = DashboardStats()
        for group in groups:
            total = total + group.stats
        return total

    def darf_memory(self, group: MonthlyGroup) -> list[DarfMemoryLine]:
        """Build the DARF calculation memory of a month."""
        stats = group.stats
        return [
            DarfMemoryLine("Rendimento Tributável Consolidado", stats.total_yield, emphasis=True),
            DarfMemoryLine("IRPJ (15%)", stats.total_yield * IRPJ_RATE),
            DarfMemoryLine("(-) IRRF Retido a Compensar", stats.total_irrf),
            DarfMemoryLine("IRPJ Líquido a Recolher", stats.total_irpj, emphasis=True),
            DarfMemoryLine("CSLL Devida (9%)", stats.total_csll, emphasis=True),
            DarfMemoryLine("Total DARF", stats.final_tax_balance, emphasis=True),
        ]

    @staticmethod
    def _period_sort_key(group: MonthlyGroup) -> tuple[str, str]:
        month, year = group.month_year.split("/")
        return (year, month)
