"""Statement import domain service."""

import time
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

import structlog

from taxpj.domain.entities import (
    ConfigProfile,
    ImportRecord,
    ImportResult,
    Transaction,
)
from taxpj.domain.errors import (
    FileReadError,
    NoTransactionsFoundError,
    ValidationError,
    file_read_failed,
    no_transactions_found,
)
from taxpj.domain.extraction import DocumentExtractor
from taxpj.parsers.bank_layout import parse_bank_layout
from taxpj.parsers.ofx import parse_ofx

logger = structlog.get_logger(__name__)

PARSER_AUTO = "auto"
PARSER_MODEL = "model"
PARSER_OFX = "ofx"
PARSER_BANK_LAYOUT = "bank-layout"
PARSERS = (PARSER_AUTO, PARSER_MODEL, PARSER_OFX, PARSER_BANK_LAYOUT)

BANK_LAYOUT_SUFFIXES = {".ret", ".cnab", ".rem"}


class ImportService:
    """Service for importing statement files into transactions."""

    def __init__(self, extractor: Optional[DocumentExtractor] = None):
        """Initialize import service.

        Args:
            extractor: Document model adapter, needed for PDF and image files
        """
        self.extractor = extractor

    def import_files(
        self,
        file_paths: Iterable[str | Path],
        profile: ConfigProfile,
        parser: str = PARSER_AUTO,
    ) -> ImportResult:
        """Import a batch of statement files for a bank profile.

        Files are processed one at a time, in order. The first failure
        aborts the whole batch; nothing from it is returned.

        Args:
            file_paths: Files to import
            profile: Bank profile the statements belong to
            parser: One of ``auto``, ``model``, ``ofx``, ``bank-layout``

        Returns:
            ImportResult with every extracted transaction

        Raises:
            ValidationError: If the parser is unknown or no model is configured
            FileReadError: If a file cannot be read
            LayoutMismatchError: If the model rejects the document's layout
            NoTransactionsFoundError: If the batch yields no transaction
            UpstreamError: If the model call fails
        """
        if parser not in PARSERS:
            raise ValidationError(f"Unknown parser '{parser}'. Supported: {', '.join(PARSERS)}")

        import_id = f"IMPORT_{int(time.time() * 1000)}"
        transactions: list[Transaction] = []
        records: list[ImportRecord] = []

        for file_path in file_paths:
            path = Path(file_path)
            extracted = self.import_file(path, profile, parser)
            assigned = [
                replace(
                    txn,
                    import_id=import_id,
                    profile_id=profile.id,
                    source_file_name=path.name,
                )
                for txn in extracted
            ]
            transactions.extend(assigned)
            records.append(
                ImportRecord(
                    id=import_id,
                    file_name=path.name,
                    timestamp=time.time(),
                    count=len(assigned),
                    profile_name=profile.name,
                )
            )
            logger.info(
                "statement_imported",
                file_name=path.name,
                count=len(assigned),
                profile_id=profile.id,
            )

        if not transactions:
            raise NoTransactionsFoundError(no_transactions_found())

        return ImportResult(
            import_id=import_id,
            transactions=tuple(transactions),
            records=tuple(records),
        )

    def import_file(self, path: Path, profile: ConfigProfile, parser: str = PARSER_AUTO) -> list[Transaction]:
        """Extract the transactions of a single file."""
        chosen = self.choose_parser(path, parser)
        content = self._read_bytes(path)

        if chosen == PARSER_OFX:
            return parse_ofx(self._decode(content))
        if chosen == PARSER_BANK_LAYOUT:
            return parse_bank_layout(self._decode(content))

        if self.extractor is None:
            raise ValidationError(
                f"Cannot read '{path.name}': no document model configured (set GEMINI_API_KEY)"
            )
        return self.extractor.extract(
            content,
            layout=profile.layout_type,
            file_name=path.name,
        )

    @staticmethod
    def choose_parser(path: Path, parser: str = PARSER_AUTO) -> str:
        """Pick the parser for a file; ``auto`` goes by file extension."""
        if parser != PARSER_AUTO:
            return parser
        suffix = path.suffix.lower()
        if suffix == ".ofx":
            return PARSER_OFX
        if suffix in BANK_LAYOUT_SUFFIXES:
            return PARSER_BANK_LAYOUT
        return PARSER_MODEL

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            logger.error("file_read_failed", file_name=path.name, error=str(e))
            raise FileReadError(file_read_failed(path.name)) from e

    @staticmethod
    def _decode(content: bytes) -> str:
        # Bank text files that are not UTF-8 are latin-1
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError:
            return content.decode("latin-1")
