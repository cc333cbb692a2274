"""Statement extraction through an external document model."""

import json
import mimetypes
import time
import uuid
from typing import Any, Optional, Protocol

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError as SchemaError

from taxpj.domain.entities import (
    PENDING_PROFILE_ID,
    AssetType,
    CompetenceDate,
    EntryType,
    LayoutType,
    Transaction,
    TransactionType,
)
from taxpj.domain.errors import (
    LayoutMismatchError,
    NoTransactionsFoundError,
    UpstreamError,
    ValidationError,
    empty_model_response,
    layout_mismatch,
    no_transactions_found,
)
from taxpj.utils.amount_parser import coerce_amount
from taxpj.utils.date_parser import normalize_statement_date

logger = structlog.get_logger(__name__)

PDF_MAGIC = b"%PDF"
FALLBACK_MIME_TYPE = "image/jpeg"
EXTRACTED_SOURCE_NAME = "EXTRATO"

SYSTEM_INSTRUCTION = """Você é um perito contábil brasileiro especializado em extratos bancários.

OBJETIVO: Extrair dados de aplicações e resgates financeiros para contabilidade de empresas (PJ).

FASE 1: VALIDAÇÃO
- Verifique se o documento é um extrato bancário ou de investimentos.

FASE 2: EXTRAÇÃO
- Retorne date (YYYYMMDD), description (NOME DO PRODUTO/APLICAÇÃO), amount (valor principal), yield (rendimento bruto), irrfRetained, iof, entryType (APPLICATION ou REDEMPTION).
- No caso de resumos mensais sem resgates individuais, trate o rendimento do mês como uma transação de REDEMPTION para que o sistema calcule os impostos devidos sobre o ganho.

Retorne APENAS o JSON conforme o schema."""

LAYOUT_RULES = {
    LayoutType.BANCO_DO_BRASIL_INVEST: """Layout: BANCO DO BRASIL - Extrato investimentos financeiros mensal.
REGRAS ESPECÍFICAS BB:
1. Localize a seção "Resumo do mês".
2. Se "APLICAÇÕES (+)" > 0, crie transação APPLICATION.
3. Se "RESGATES (-)" > 0, crie transação REDEMPTION.
4. IMPORTANTE: Se não houver resgates mas houver "RENDIMENTO BRUTO (+)" maior que zero, crie uma transação do tipo REDEMPTION com o valor do rendimento bruto para fins de cálculo de tributação.
5. Data: Use o último dia do "Mês/ano referência" (ex: DEZEMBRO/2025 vira 20251231).
6. Campos: 'yield' é o "RENDIMENTO BRUTO (+)", 'irrfRetained' é o "IMPOSTO DE RENDA (-)", 'iof' é o campo "IOF (-)".
7. No campo 'description', coloque o nome do fundo ou produto (ex: RF Ref DI Plus Ágil).""",
}

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "isValidLayout": {"type": "boolean"},
        "detectedBank": {"type": "string"},
        "transactions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "date": {"type": "string"},
                    "description": {"type": "string"},
                    "amount": {"type": "number"},
                    "yield": {"type": "number"},
                    "irrfRetained": {"type": "number"},
                    "iof": {"type": "number"},
                    "entryType": {"type": "string"},
                },
                "required": ["date", "amount", "entryType"],
            },
        },
    },
    "required": ["isValidLayout", "transactions"],
}


class DocumentModelClient(Protocol):
    """What the extractor needs from a model client."""

    def generate_json(
        self,
        prompt: str,
        document: bytes,
        mime_type: str,
        system_instruction: str,
        response_schema: dict[str, Any],
    ) -> str: ...


class ExtractedTransaction(BaseModel):
    """One movement as the model reports it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date: str
    amount: Any
    entry_type: str = Field(alias="entryType")
    description: Optional[str] = None
    yield_amount: Any = Field(default=None, alias="yield")
    irrf_retained: Any = Field(default=None, alias="irrfRetained")
    iof: Any = None


class ExtractionResponse(BaseModel):
    """Top-level answer of the model."""

    model_config = ConfigDict(extra="ignore")

    is_valid_layout: bool = Field(alias="isValidLayout")
    detected_bank: Optional[str] = Field(default=None, alias="detectedBank")
    transactions: list[ExtractedTransaction]


def resolve_mime_type(document: bytes, declared: Optional[str], file_name: Optional[str] = None) -> str:
    """Pick the MIME type sent along with a document.

    The declared type wins, then a guess from the file name; otherwise PDFs
    are recognised by their magic bytes (``JVBERi`` once base64-encoded)
    and everything else is sent as JPEG.
    """
    if declared:
        return declared
    if file_name:
        guessed, _ = mimetypes.guess_type(file_name)
        if guessed:
            return guessed
    if document.startswith(PDF_MAGIC):
        return "application/pdf"
    return FALLBACK_MIME_TYPE


class DocumentExtractor:
    """Adapter turning a model's JSON answer into transactions."""

    def __init__(self, client: DocumentModelClient):
        """Initialize document extractor.

        Args:
            client: Model client (GeminiClient in production)
        """
        self.client = client

    def build_prompt(self, layout: LayoutType) -> str:
        """Build the user prompt for a layout hint."""
        prompt = f"Analise este extrato do {layout.value}."
        rules = LAYOUT_RULES.get(layout)
        if rules:
            prompt = f"{prompt} {rules}"
        return prompt

    def extract(
        self,
        document: bytes,
        mime_type: Optional[str] = None,
        layout: LayoutType = LayoutType.GENERIC_INVESTMENT,
        file_name: Optional[str] = None,
    ) -> list[Transaction]:
        """Extract the transactions of a statement document.

        Args:
            document: Raw file bytes
            mime_type: Declared MIME type, if known
            layout: Layout the document is expected to follow
            file_name: Name of the uploaded file, used to guess the MIME type

        Returns:
            Transactions with a pending profile id

        Raises:
            UpstreamError: If the call fails or the answer has the wrong shape
            LayoutMismatchError: If the document belongs to another layout
            NoTransactionsFoundError: If no movement was extracted
        """
        text = self.client.generate_json(
            prompt=self.build_prompt(layout),
            document=document,
            mime_type=resolve_mime_type(document, mime_type, file_name),
            system_instruction=SYSTEM_INSTRUCTION,
            response_schema=RESPONSE_SCHEMA,
        )
        response = self.parse_response(text)

        if not response.is_valid_layout and not layout.is_generic:
            raise LayoutMismatchError(layout_mismatch(layout.value, response.detected_bank))

        if not response.transactions:
            raise NoTransactionsFoundError(no_transactions_found())

        import_id = f"IMPORT_{int(time.time() * 1000)}"
        bank_name = layout.value.replace("_", " ")
        return [self.to_transaction(item, import_id, bank_name) for item in response.transactions]

    def parse_response(self, text: str) -> ExtractionResponse:
        """Decode and validate the model answer.

        Raises:
            UpstreamError: If the text is empty, not JSON, or off-schema
        """
        if not text or not text.strip():
            raise UpstreamError(empty_model_response())

        try:
            payload = json.loads(text.strip())
        except json.JSONDecodeError as e:
            raise UpstreamError(f"Model returned invalid JSON: {e}") from e

        try:
            return ExtractionResponse.model_validate(payload)
        except SchemaError as e:
            raise UpstreamError(f"Model response does not match the schema: {e}") from e

    def to_transaction(
        self, item: ExtractedTransaction, import_id: str, bank_name: str
    ) -> Transaction:
        """Build a canonical transaction from one extracted movement.

        Any entry type other than an exact ``APPLICATION`` is a redemption.
        """
        entry_type = (
            EntryType.APPLICATION if item.entry_type == "APPLICATION" else EntryType.REDEMPTION
        )
        if item.description:
            description = item.description.upper()
        elif entry_type == EntryType.APPLICATION:
            description = "APLICAÇÃO"
        else:
            description = "RESGATE/RENDIMENTO"

        date = normalize_statement_date(item.date)
        try:
            CompetenceDate.parse(date)
        except ValidationError:
            logger.warning("statement_date_unresolved", raw_date=item.date)

        return Transaction(
            id=uuid.uuid4().hex,
            import_id=import_id,
            profile_id=PENDING_PROFILE_ID,
            source_file_name=EXTRACTED_SOURCE_NAME,
            date=date,
            description=description,
            amount=coerce_amount(item.amount),
            type=TransactionType.for_entry(entry_type),
            entry_type=entry_type,
            asset_type=AssetType.RENDA_FIXA,
            yield_amount=coerce_amount(item.yield_amount),
            irrf_retained=coerce_amount(item.irrf_retained),
            iof=coerce_amount(item.iof),
            bank_name=bank_name,
            bank_account="---",
        )
