"""Domain layer for erpledger application."""

_SERVICES = {
    "JournalEntryService": "erpledger.domain.journal_entry",
    "BatchOrchestrator": "erpledger.domain.batch",
    "BankTransactionService": "erpledger.domain.bank_transaction",
    "AccountService": "erpledger.domain.account",
    "validate_journal_entry": "erpledger.domain.validation",
}

__all__ = list(_SERVICES)


# Import services lazily: the gateway layer imports domain entities, and the
# services import the gateway layer.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
