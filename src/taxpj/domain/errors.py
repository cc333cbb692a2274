"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class FileReadError(DomainError):
    """A local statement file could not be read or decoded."""


class LayoutMismatchError(DomainError):
    """The document does not match the bank layout that was requested."""


class NoTransactionsFoundError(DomainError):
    """Extraction finished without producing any transaction."""


class UpstreamError(DomainError):
    """The external document service failed or answered with garbage."""


class UnsupportedRegimeError(DomainError, NotImplementedError):
    """Tax regime has no computation path."""


def profile_not_found(profile_id: str) -> str:
    """Return message for missing bank profile."""
    return f"Bank profile {profile_id} not found"


def missing_profile_fields(fields: list[str]) -> str:
    """Return message for an incomplete bank profile."""
    return f"Fill in every field and select a layout (missing: {', '.join(fields)})"


def file_read_failed(file_name: str) -> str:
    """Return message for an unreadable local file."""
    return f"Could not read local file '{file_name}'"


def layout_mismatch(layout_hint: str, detected_bank: str | None) -> str:
    """Return message when the document belongs to another layout."""
    return (
        f"Mismatch: the uploaded file does not look like layout {layout_hint}. "
        f"Identified as: {detected_bank or 'Outro'}."
    )


def no_transactions_found() -> str:
    """Return message for an extraction without entries."""
    return "No yield or movement entries were found in this statement."


def empty_model_response() -> str:
    """Return message when the model returns no text."""
    return "The model could not read any data from the file."


def unsupported_regime(regime: str) -> str:
    """Return message for a regime without a tax formula."""
    return f"Tax calculation is not implemented for regime {regime}"
