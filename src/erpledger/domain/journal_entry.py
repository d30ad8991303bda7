"""Journal entry domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from erpledger.domain.entities import JournalEntryDraft, JournalLine, RemoteRecord, ValidationResult
from erpledger.domain.errors import (
    GatewayError,
    JournalEntryInvalidError,
    StructuralInputError,
    missing_argument,
)
from erpledger.domain.validation import validate_journal_entry
from erpledger.gateway.base import LedgerGateway
from erpledger.gateway.mappers import JOURNAL_ENTRY, draft_to_payload

logger = logging.getLogger(__name__)


class JournalEntryService:
    """Service for validating, creating and submitting journal entries."""

    def __init__(self, gateway: LedgerGateway):
        """Initialize journal entry service.

        Args:
            gateway: Ledger gateway instance
        """
        self.gateway = gateway

    def validate(self, draft: JournalEntryDraft) -> ValidationResult:
        """Validate a draft locally. No gateway call is made."""
        return validate_journal_entry(draft)

    def create(
        self,
        draft: JournalEntryDraft,
        skip_validation: bool = False,
        auto_submit: bool = False,
    ) -> RemoteRecord:
        """Create a journal entry in the ledger.

        Args:
            draft: Journal entry draft
            skip_validation: Send the draft without validating it first
            auto_submit: Submit (post) the entry right after creating it

        Returns:
            The created record, or the submitted record when auto_submit

        Raises:
            JournalEntryInvalidError: If validation fails (nothing is sent)
            GatewayError: If the create call fails, or the submit call fails
                after a successful create; in the latter case the entry
                exists as a draft and the message names it
        """
        if not skip_validation:
            result = validate_journal_entry(draft)
            if not result.valid:
                raise JournalEntryInvalidError(result)

        record = self.gateway.create_document(JOURNAL_ENTRY, draft_to_payload(draft))
        name = record.get("name")
        if not name:
            raise GatewayError("Failed to create Journal Entry: response has no document name")
        logger.info("Created journal entry %s", name)

        if not auto_submit:
            return record

        try:
            return self.submit(name)
        except GatewayError as e:
            raise GatewayError(
                f"Journal Entry {name} was created but could not be submitted: {e}",
                status_code=e.status_code,
            ) from e

    def submit(self, name: str) -> RemoteRecord:
        """Submit (post) a draft journal entry.

        Submitted entries are terminal: they can no longer be edited.

        Raises:
            StructuralInputError: If name is empty
            GatewayError: If the ledger rejects the submission
        """
        if not name:
            raise StructuralInputError(missing_argument("journal_entry_name"))
        record = self.gateway.submit_document(JOURNAL_ENTRY, name)
        logger.info("Submitted journal entry %s", name)
        return record


def build_bank_journal_entry(
    kind: str,
    amount: Decimal,
    counter_account: str,
    bank_account: str,
    posting_date: date,
    company: str,
    description: Optional[str] = None,
) -> JournalEntryDraft:
    """Build the balanced two-line draft for a bank movement.

    Income debits the bank account and credits the income account; expense
    debits the expense account and credits the bank account.

    Args:
        kind: "income" or "expense"
        amount: Unsigned amount of the movement
        counter_account: Income or expense ledger account
        bank_account: Ledger account of the bank
        posting_date: Posting date
        company: Owning company
        description: Remark used on the entry and both lines

    Raises:
        StructuralInputError: If kind is unknown or amount is not positive
    """
    if kind not in ("income", "expense"):
        raise StructuralInputError(f"Unknown transaction kind '{kind}' (expected income or expense)")
    if amount <= 0:
        raise StructuralInputError("amount must be positive")

    if kind == "income":
        debit_account, credit_account = bank_account, counter_account
    else:
        debit_account, credit_account = counter_account, bank_account

    return JournalEntryDraft(
        posting_date=posting_date,
        company=company,
        lines=(
            JournalLine(account=debit_account, debit=amount, remark=description),
            JournalLine(account=credit_account, credit=amount, remark=description),
        ),
        remark=description,
    )
