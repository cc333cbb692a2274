"""Domain layer for taxpj application."""

from taxpj.domain.tax import calculate_tax
from taxpj.domain.summary import SummaryService
from taxpj.domain.ledger import LedgerService
from taxpj.domain.profile import ProfileService
from taxpj.domain.extraction import DocumentExtractor
from taxpj.domain.statement_import import ImportService
from taxpj.domain.export import generate_export

__all__ = [
    "calculate_tax",
    "SummaryService",
    "LedgerService",
    "ProfileService",
    "DocumentExtractor",
    "ImportService",
    "generate_export",
]
