"""Shared pytest fixtures for erpledger tests."""

import json
from datetime import date
from decimal import Decimal

import pytest

from erpledger.domain.account import AccountService
from erpledger.domain.bank_transaction import BankTransactionService
from erpledger.domain.batch import BatchOrchestrator
from erpledger.domain.entities import JournalEntryDraft, JournalLine
from erpledger.domain.journal_entry import JournalEntryService
from erpledger.gateway.memory import InMemoryGateway


@pytest.fixture
def gateway():
    """Create an empty in-memory ledger."""
    return InMemoryGateway()


@pytest.fixture
def journal_service(gateway):
    """Create a JournalEntryService on the in-memory ledger."""
    return JournalEntryService(gateway)


@pytest.fixture
def orchestrator(gateway):
    """Create a BatchOrchestrator on the in-memory ledger."""
    return BatchOrchestrator(gateway)


@pytest.fixture
def bank_service(gateway):
    """Create a BankTransactionService on the in-memory ledger."""
    return BankTransactionService(gateway)


@pytest.fixture
def account_service(gateway):
    """Create an AccountService on the in-memory ledger."""
    return AccountService(gateway)


def _build_draft(debit="100.00", credit="100.00", company="ABC Corp", remark=None):
    """Build a two-line draft debiting expenses and crediting the bank."""
    return JournalEntryDraft(
        posting_date=date(2025, 1, 15),
        company=company,
        lines=(
            JournalLine(account="5200 - Office Supplies - ABC", debit=Decimal(debit)),
            JournalLine(account="1111 - Checking - ABC", credit=Decimal(credit)),
        ),
        remark=remark,
    )


@pytest.fixture
def make_draft():
    """Factory for two-line drafts with chosen debit and credit."""
    return _build_draft


@pytest.fixture
def balanced_draft():
    """A valid, balanced two-line draft."""
    return _build_draft()


@pytest.fixture
def unbalanced_draft():
    """A draft whose debits exceed its credits by 10."""
    return _build_draft(debit="100.00", credit="90.00")


@pytest.fixture
def sample_bank_transactions(gateway):
    """Seed three bank transactions of different sizes."""
    rows = [
        {
            "name": "ACC-BTN-2025-00001",
            "date": "2025-01-05",
            "deposit": 1500,
            "withdrawal": 0,
            "description": "Customer payment",
            "bank_account": "Checking - ABC",
            "company": "ABC Corp",
            "status": "Unreconciled",
        },
        {
            "name": "ACC-BTN-2025-00002",
            "date": "2025-01-10",
            "deposit": 0,
            "withdrawal": 250,
            "description": "Rent",
            "bank_account": "Checking - ABC",
            "company": "ABC Corp",
            "status": "Unreconciled",
        },
        {
            "name": "ACC-BTN-2025-00003",
            "date": "2025-01-20",
            "deposit": 0,
            "withdrawal": 45.5,
            "description": "Office supplies",
            "bank_account": "Checking - ABC",
            "company": "ABC Corp",
            "status": "Reconciled",
        },
    ]
    for row in rows:
        gateway.add_document("Bank Transaction", row)
    return rows


def _entry_dict(debit=100, credit=100, company="ABC Corp"):
    """ERPNext-shaped journal entry as read from a JSON file."""
    return {
        "posting_date": "2025-01-15",
        "company": company,
        "user_remark": "Office supplies",
        "accounts": [
            {"account": "5200 - Office Supplies - ABC", "debit_in_account_currency": debit},
            {"account": "1111 - Checking - ABC", "credit_in_account_currency": credit},
        ],
    }


@pytest.fixture
def entry_dict():
    """Factory for ERPNext-shaped journal entry dicts."""
    return _entry_dict


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a temp file and return its path."""

    def _write(data, name="entry.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_runner, gateway):
    """Invoke the CLI against the in-memory ledger."""
    from erpledger.cli.main import cli

    def _invoke(*args):
        return cli_runner.invoke(cli, list(args), obj={"gateway": gateway})

    return _invoke
