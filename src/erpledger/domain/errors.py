"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class StructuralInputError(DomainError):
    """Required input missing or malformed before any gateway call."""


class ConfigurationError(DomainError):
    """Gateway configuration is missing or unusable."""


class JournalEntryInvalidError(DomainError):
    """Journal entry failed double-entry validation.

    The full validation verdict is kept on ``result`` so callers can render
    every error and warning, not only the message.
    """

    def __init__(self, result):
        self.result = result
        super().__init__(journal_entry_invalid(list(result.errors)))


class GatewayError(Exception):
    """A call to the remote ledger failed.

    Raised for transport failures, authentication failures and rejections
    by the remote system (e.g. schema violations). ``status_code`` is the
    HTTP status when one was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def journal_entry_invalid(errors: list[str]) -> str:
    """Return message for a journal entry that failed validation."""
    return f"Journal entry validation failed: {', '.join(errors)}"


def missing_argument(name: str) -> str:
    """Return message for a required argument that was not supplied."""
    return f"{name} is required"


def document_not_found(doctype: str, name: str) -> str:
    """Return message for a missing remote document."""
    return f"{doctype} {name} not found"


def gateway_call_failed(action: str, reason: str) -> str:
    """Return message for a failed gateway call."""
    return f"Failed to {action}: {reason}"


def not_authenticated() -> str:
    """Return message when API credentials are missing."""
    return (
        "Not authenticated with ERPNext. "
        "Please configure ERPNEXT_API_KEY and ERPNEXT_API_SECRET."
    )
