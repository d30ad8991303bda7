"""Mapper functions to convert between domain entities and remote records.

This layer isolates the ERPNext field names (``debit_in_account_currency``,
``user_remark``, ``docstatus`` ...) so the domain model does not depend on
the remote schema.
"""

from decimal import Decimal
from typing import Any, Optional

from erpledger.domain import entities as domain
from erpledger.domain.entities import RemoteRecord
from erpledger.domain.errors import StructuralInputError
from erpledger.utils.amount_parser import parse_amount
from erpledger.utils.date_parser import format_date, parse_date

JOURNAL_ENTRY = "Journal Entry"
BANK_TRANSACTION = "Bank Transaction"
BANK_ACCOUNT = "Bank Account"
ACCOUNT = "Account"
COMPANY = "Company"


def _optional_date(value: Any, field_name: str):
    if value in (None, ""):
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        raise StructuralInputError(f"{field_name}: {e}")


def _amount(value: Any, field_name: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        raise StructuralInputError(f"{field_name}: {e}")


def _flag(value: Any) -> bool:
    return bool(int(value)) if value not in (None, "") else False


def line_from_dict(data: dict[str, Any]) -> domain.JournalLine:
    """Build a JournalLine from an ERPNext-shaped account row.

    Accepts ``debit_in_account_currency``/``credit_in_account_currency`` or
    the short ``debit``/``credit`` keys.
    """
    debit = data.get("debit_in_account_currency", data.get("debit"))
    credit = data.get("credit_in_account_currency", data.get("credit"))
    return domain.JournalLine(
        account=data.get("account") or None,
        debit=_amount(debit, "debit"),
        credit=_amount(credit, "credit"),
        remark=data.get("user_remark") or data.get("remark"),
        reference_type=data.get("reference_type"),
        reference_name=data.get("reference_name"),
    )


def draft_from_dict(data: dict[str, Any]) -> domain.JournalEntryDraft:
    """Build a JournalEntryDraft from an ERPNext-shaped journal entry.

    Missing fields are kept empty so the validator can report them; only
    values that cannot be interpreted at all raise.

    Raises:
        StructuralInputError: If the input is not a mapping or holds an
            unparseable date or amount
    """
    if not isinstance(data, dict):
        raise StructuralInputError("journal entry must be an object")

    rows = data.get("accounts", data.get("lines")) or []
    if not isinstance(rows, list):
        raise StructuralInputError("accounts must be a list")

    return domain.JournalEntryDraft(
        posting_date=_optional_date(data.get("posting_date"), "posting_date"),
        company=data.get("company") or None,
        lines=tuple(line_from_dict(row) for row in rows),
        remark=data.get("user_remark") or data.get("remark"),
        voucher_type=data.get("voucher_type") or JOURNAL_ENTRY,
        cheque_no=data.get("cheque_no"),
        cheque_date=_optional_date(data.get("cheque_date"), "cheque_date"),
    )


def line_to_payload(line: domain.JournalLine) -> dict[str, Any]:
    """Convert a JournalLine to an ERPNext account row."""
    payload: dict[str, Any] = {
        "account": line.account,
        "debit_in_account_currency": float(line.debit),
        "credit_in_account_currency": float(line.credit),
    }
    if line.remark:
        payload["user_remark"] = line.remark
    if line.reference_type:
        payload["reference_type"] = line.reference_type
    if line.reference_name:
        payload["reference_name"] = line.reference_name
    return payload


def draft_to_payload(draft: domain.JournalEntryDraft) -> dict[str, Any]:
    """Convert a JournalEntryDraft to a Journal Entry create payload."""
    payload: dict[str, Any] = {
        "doctype": JOURNAL_ENTRY,
        "voucher_type": draft.voucher_type,
        "posting_date": format_date(draft.posting_date) if draft.posting_date else None,
        "company": draft.company,
        "accounts": [line_to_payload(line) for line in draft.lines],
    }
    if draft.remark:
        payload["user_remark"] = draft.remark
    if draft.cheque_no:
        payload["cheque_no"] = draft.cheque_no
    if draft.cheque_date:
        payload["cheque_date"] = format_date(draft.cheque_date)
    return payload


def bank_transaction_to_domain(record: RemoteRecord) -> domain.BankTransaction:
    """Convert a Bank Transaction record to a BankTransaction entity."""
    status = record.get("status") or domain.TransactionStatus.PENDING.value
    return domain.BankTransaction(
        name=record["name"],
        date=parse_date(record["date"]),
        deposit=parse_amount(record.get("deposit")),
        withdrawal=parse_amount(record.get("withdrawal")),
        description=record.get("description") or "",
        status=domain.TransactionStatus(status),
        reference_number=record.get("reference_number"),
        transaction_id=record.get("transaction_id"),
        bank_account=record.get("bank_account"),
        company=record.get("company"),
        currency=record.get("currency"),
    )


def bank_account_to_domain(record: RemoteRecord) -> domain.BankAccount:
    """Convert a Bank Account record to a BankAccount entity."""
    return domain.BankAccount(
        name=record["name"],
        account_name=record.get("account_name") or record["name"],
        account=record.get("account"),
        bank=record.get("bank"),
        company=record.get("company"),
        is_company_account=_flag(record.get("is_company_account")),
        bank_account_no=record.get("bank_account_no"),
        iban=record.get("iban"),
        is_default=_flag(record.get("is_default")),
        disabled=_flag(record.get("disabled")),
    )


def ledger_account_to_domain(record: RemoteRecord) -> domain.LedgerAccount:
    """Convert an Account record to a LedgerAccount entity."""
    root_type: Optional[domain.RootType] = None
    if record.get("root_type"):
        root_type = domain.RootType(record["root_type"])
    return domain.LedgerAccount(
        name=record["name"],
        account_name=record.get("account_name") or record["name"],
        company=record.get("company"),
        account_number=record.get("account_number") or None,
        account_type=record.get("account_type") or None,
        root_type=root_type,
        is_group=_flag(record.get("is_group")),
        parent_account=record.get("parent_account") or None,
    )
