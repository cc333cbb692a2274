"""Accounting ledger domain service."""

from typing import Iterable, Optional

from taxpj.domain.entities import (
    REMOVED_BANK_PROFILE,
    ConfigProfile,
    EntryType,
    LedgerLine,
    LedgerLineKind,
    LedgerSection,
    MonthlyGroup,
    Transaction,
)
from taxpj.domain.tax import ZERO


# Fixed chart-of-accounts codes for redemption components
YIELD_ACCOUNT = "807"
IRRF_ACCOUNT = "806"
IOF_ACCOUNT = "808"

DEFAULT_ASSET_NAME = "APLICAÇÃO FINANCEIRA"

APPLICATION_LABEL = "APLICAÇÃO FINANCEIRA"
REDEMPTION_LABEL = "RESGATE DE APLICAÇÃO FINANCEIRA"
YIELD_LABEL = "RENDIMENTO DE RESGATE DE APLICAÇÃO FINANCEIRA"
IRRF_LABEL = "IRRF RETIDO S/RENDIMENTO DE RESGATE DE APLICAÇÃO FINANCEIRA"
IOF_LABEL = "IOF S/RENDIMENTO DE RESGATE DE APLICAÇÃO FINANCEIRA"


class LedgerService:
    """Service for projecting transactions into double-entry lines."""

    def __init__(self, profiles: Iterable[ConfigProfile]):
        """Initialize ledger service.

        Args:
            profiles: Bank profiles currently configured
        """
        self.profiles = {profile.id: profile for profile in profiles}

    def resolve_profile(self, profile_id: Optional[str]) -> ConfigProfile:
        """Get the profile of a transaction, or the removed-bank placeholder."""
        profile = self.profiles.get(str(profile_id)) if profile_id is not None else None
        if profile is None:
            return REMOVED_BANK_PROFILE
        return profile

    def project(self, transaction: Transaction, profile: ConfigProfile) -> list[LedgerLine]:
        """Expand a transaction into ledger lines.

        An application books one line. A redemption always books the
        principal, then one line each for yield, IRRF and IOF when present.
        """
        asset_name = (transaction.description or DEFAULT_ASSET_NAME).upper()
        bank_name = profile.name.upper()
        month_year = self._ledger_month(transaction.date)

        def line(kind, debit, credit, label, amount) -> LedgerLine:
            return LedgerLine(
                transaction_id=transaction.id,
                date=transaction.date,
                debit=debit,
                credit=credit,
                history=f"{label} - {bank_name} - {asset_name} - {month_year}",
                amount=amount,
                kind=kind,
            )

        if transaction.entry_type == EntryType.APPLICATION:
            return [
                line(
                    LedgerLineKind.APPLICATION,
                    profile.asset_code,
                    profile.bank_code,
                    APPLICATION_LABEL,
                    transaction.amount,
                )
            ]

        yield_amount = transaction.yield_amount or ZERO
        irrf = transaction.irrf_retained or ZERO
        iof = transaction.iof or ZERO

        # Principal is the amount net of yield, grossed back up by withheld IRRF
        principal = transaction.amount - yield_amount + irrf

        lines = [
            line(
                LedgerLineKind.PRINCIPAL,
                profile.bank_code,
                profile.asset_code,
                REDEMPTION_LABEL,
                principal,
            )
        ]
        if yield_amount:
            lines.append(
                line(
                    LedgerLineKind.YIELD,
                    profile.liability_code,
                    YIELD_ACCOUNT,
                    YIELD_LABEL,
                    yield_amount,
                )
            )
        if irrf:
            lines.append(
                line(LedgerLineKind.IRRF, IRRF_ACCOUNT, profile.bank_code, IRRF_LABEL, irrf)
            )
        if iof:
            lines.append(
                line(LedgerLineKind.IOF, IOF_ACCOUNT, profile.bank_code, IOF_LABEL, iof)
            )
        return lines

    def project_transaction(self, transaction: Transaction) -> list[LedgerLine]:
        """Expand a transaction using the profile it references."""
        return self.project(transaction, self.resolve_profile(transaction.profile_id))

    def build_sections(self, groups: Iterable[MonthlyGroup]) -> list[LedgerSection]:
        """Build ledger sections per competence month and bank profile.

        Within a month, profiles appear in the order their first
        transaction does.
        """
        sections: list[LedgerSection] = []
        for group in groups:
            by_profile: dict[str, list[Transaction]] = {}
            for txn in group.transactions:
                by_profile.setdefault(txn.profile_id, []).append(txn)

            for profile_id, txns in by_profile.items():
                profile = self.resolve_profile(profile_id)
                lines: list[LedgerLine] = []
                for txn in txns:
                    lines.extend(self.project(txn, profile))
                sections.append(
                    LedgerSection(
                        month_year=group.month_year,
                        label=group.label,
                        profile=profile,
                        lines=tuple(lines),
                    )
                )
        return sections

    @staticmethod
    def _ledger_month(raw_date: str) -> str:
        # Any 8-character date yields a month; its characters are not checked
        if raw_date and len(raw_date) == 8:
            return f"{raw_date[4:6]}/{raw_date[0:4]}"
        return ""
