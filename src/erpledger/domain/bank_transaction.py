"""Bank transaction domain service."""

import json
import logging
from typing import Any, Optional

from erpledger.domain.entities import BankAccount, BankTransaction, BankTransactionQuery
from erpledger.domain.errors import StructuralInputError, missing_argument
from erpledger.gateway.base import LedgerGateway
from erpledger.gateway.mappers import (
    BANK_ACCOUNT,
    BANK_TRANSACTION,
    bank_account_to_domain,
    bank_transaction_to_domain,
)
from erpledger.utils.amount_parser import to_cents
from erpledger.utils.date_parser import format_date

logger = logging.getLogger(__name__)

TRANSACTION_FIELDS = [
    "name",
    "date",
    "deposit",
    "withdrawal",
    "description",
    "reference_number",
    "transaction_id",
    "bank_account",
    "company",
    "currency",
    "status",
]

BANK_ACCOUNT_FIELDS = [
    "name",
    "account_name",
    "account",
    "bank",
    "is_company_account",
    "company",
    "bank_account_no",
    "iban",
    "is_default",
    "disabled",
]

CREATE_BANK_ENTRIES_METHOD = (
    "erpnext.accounts.doctype.bank_transaction.bank_transaction_upload.create_bank_entries"
)


def build_transaction_filters(query: BankTransactionQuery) -> dict[str, Any]:
    """Translate the query into filters the ledger can evaluate.

    Amount bounds are not included: they apply to the larger of deposit and
    withdrawal, which the ledger's filter language cannot express.
    """
    filters: dict[str, Any] = {}
    if query.bank_account:
        filters["bank_account"] = query.bank_account
    if query.company:
        filters["company"] = query.company
    if query.status:
        filters["status"] = query.status.value

    if query.from_date and query.to_date:
        filters["date"] = ["between", [format_date(query.from_date), format_date(query.to_date)]]
    elif query.from_date:
        filters["date"] = [">=", format_date(query.from_date)]
    elif query.to_date:
        filters["date"] = ["<=", format_date(query.to_date)]
    return filters


def within_amount_range(transaction: BankTransaction, query: BankTransactionQuery) -> bool:
    """Residual amount filter applied after fetching.

    The bounds are inclusive and compared in cents.
    """
    amount = to_cents(transaction.amount)
    if query.min_amount is not None and amount < to_cents(query.min_amount):
        return False
    if query.max_amount is not None and amount > to_cents(query.max_amount):
        return False
    return True


class BankTransactionService:
    """Service for searching and importing bank transactions."""

    def __init__(self, gateway: LedgerGateway):
        """Initialize bank transaction service.

        Args:
            gateway: Ledger gateway instance
        """
        self.gateway = gateway

    def search(self, query: BankTransactionQuery) -> list[BankTransaction]:
        """Search bank transactions.

        Account, company, status and date bounds are filtered by the ledger;
        the amount range is then applied locally. Results keep the order the
        ledger returned them in.

        Args:
            query: Search criteria

        Returns:
            List of matching bank transactions

        Raises:
            StructuralInputError: If a range is inverted
            GatewayError: If the list call fails
        """
        if query.from_date and query.to_date and query.from_date > query.to_date:
            raise StructuralInputError("from_date must not be after to_date")
        if (
            query.min_amount is not None
            and query.max_amount is not None
            and to_cents(query.min_amount) > to_cents(query.max_amount)
        ):
            raise StructuralInputError("min_amount must not be greater than max_amount")

        filters = build_transaction_filters(query)
        records = self.gateway.list_documents(
            BANK_TRANSACTION, filters=filters, fields=TRANSACTION_FIELDS, limit=0
        )
        transactions = [bank_transaction_to_domain(r) for r in records]

        matched = [t for t in transactions if within_amount_range(t, query)]
        logger.debug("Bank transaction search: %d fetched, %d matched", len(transactions), len(matched))
        return matched

    def batch_import(self, columns: list[str], rows: list[list[Any]], bank_account: str) -> Any:
        """Import bank statement rows with the ledger's bulk upload method.

        Args:
            columns: Column headers, e.g. ["Date", "Deposit", "Withdrawal", "Description"]
            rows: Statement rows, one list of cell values per row
            bank_account: Bank Account the transactions belong to

        Returns:
            The ledger's native import result

        Raises:
            StructuralInputError: If columns, rows or bank_account is missing
            GatewayError: If the import call fails
        """
        if not columns:
            raise StructuralInputError(missing_argument("columns"))
        if not rows:
            raise StructuralInputError(missing_argument("data"))
        if not bank_account:
            raise StructuralInputError(missing_argument("bank_account"))

        logger.info("Importing %d bank transaction rows into %s", len(rows), bank_account)
        return self.gateway.call_method(
            CREATE_BANK_ENTRIES_METHOD,
            {
                "columns": json.dumps(columns),
                "data": json.dumps(rows, default=str),
                "bank_account": bank_account,
            },
        )

    def list_bank_accounts(self, company: Optional[str] = None) -> list[BankAccount]:
        """List bank accounts, optionally for one company."""
        filters = {"company": company} if company else {}
        records = self.gateway.list_documents(
            BANK_ACCOUNT, filters=filters, fields=BANK_ACCOUNT_FIELDS, limit=0
        )
        return [bank_account_to_domain(r) for r in records]
