"""Tests for the journal entry service."""

from datetime import date
from decimal import Decimal

import pytest

from erpledger.domain.errors import GatewayError, JournalEntryInvalidError, StructuralInputError
from erpledger.domain.journal_entry import build_bank_journal_entry
from erpledger.domain.validation import validate_journal_entry


def test_create_returns_record_with_name(journal_service, gateway, balanced_draft):
    """Creating a valid draft returns the remote record."""
    record = journal_service.create(balanced_draft)

    assert record["name"].startswith("ACC-JV-")
    assert record["docstatus"] == 0
    assert record["company"] == "ABC Corp"


def test_create_rejects_invalid_draft(journal_service, gateway, unbalanced_draft):
    """Invalid drafts raise with the validation result and are not sent."""
    with pytest.raises(JournalEntryInvalidError) as excinfo:
        journal_service.create(unbalanced_draft)

    assert excinfo.value.result.valid is False
    assert "Journal entry validation failed: Debits (100.00)" in str(excinfo.value)
    assert gateway.calls == []


def test_create_skip_validation_sends_anyway(journal_service, gateway, unbalanced_draft):
    """skip_validation hands the draft straight to the ledger."""
    record = journal_service.create(unbalanced_draft, skip_validation=True)

    assert gateway.calls == [("create", "Journal Entry")]
    assert record["accounts"][1]["credit_in_account_currency"] == 90.0


def test_create_with_auto_submit(journal_service, gateway, balanced_draft):
    """auto_submit returns the submitted record."""
    record = journal_service.create(balanced_draft, auto_submit=True)

    assert record["docstatus"] == 1
    assert gateway.calls == [("create", "Journal Entry"), ("submit", "Journal Entry")]


def test_create_submit_failure_names_created_entry(journal_service, gateway, balanced_draft):
    """When submit fails after create, the error names the draft left behind."""
    gateway.fail_when("submit", "Fiscal year is closed")

    with pytest.raises(GatewayError) as excinfo:
        journal_service.create(balanced_draft, auto_submit=True)

    name = gateway.documents("Journal Entry")[0]["name"]
    assert f"Journal Entry {name} was created but could not be submitted" in str(excinfo.value)
    assert "Fiscal year is closed" in str(excinfo.value)


def test_submit_is_terminal(journal_service, gateway, balanced_draft):
    """A submitted entry cannot be submitted or edited again."""
    name = journal_service.create(balanced_draft)["name"]
    journal_service.submit(name)

    with pytest.raises(GatewayError):
        journal_service.submit(name)
    with pytest.raises(GatewayError):
        gateway.update_document("Journal Entry", name, {"user_remark": "changed"})


def test_submit_requires_name(journal_service):
    """An empty name is a structural error."""
    with pytest.raises(StructuralInputError):
        journal_service.submit("")


def test_submit_unknown_entry(journal_service):
    """Submitting a missing entry fails with a 404 gateway error."""
    with pytest.raises(GatewayError) as excinfo:
        journal_service.submit("ACC-JV-99999")

    assert excinfo.value.status_code == 404


def test_income_entry_debits_bank():
    """Income debits the bank and credits the income account."""
    draft = build_bank_journal_entry(
        "income", Decimal("1500"), "4100 - Sales - ABC", "1111 - Checking - ABC",
        date(2025, 1, 5), "ABC Corp", "Customer payment",
    )

    debit_line, credit_line = draft.lines
    assert debit_line.account == "1111 - Checking - ABC"
    assert credit_line.account == "4100 - Sales - ABC"
    assert debit_line.debit == credit_line.credit == Decimal("1500")
    assert validate_journal_entry(draft).valid


def test_expense_entry_credits_bank():
    """Expense debits the expense account and credits the bank."""
    draft = build_bank_journal_entry(
        "expense", Decimal("45.50"), "5200 - Office Supplies - ABC", "1111 - Checking - ABC",
        date(2025, 1, 20), "ABC Corp",
    )

    assert draft.lines[0].account == "5200 - Office Supplies - ABC"
    assert draft.lines[1].account == "1111 - Checking - ABC"
    assert validate_journal_entry(draft).valid


@pytest.mark.parametrize("kind,amount", [("transfer", Decimal("1")), ("income", Decimal("0"))])
def test_bank_entry_rejects_bad_input(kind, amount):
    """Unknown kinds and non-positive amounts are rejected."""
    with pytest.raises(StructuralInputError):
        build_bank_journal_entry(kind, amount, "A", "B", date(2025, 1, 1), "ABC Corp")
