"""Tests for journal entry commands."""

import json

from erpledger.cli.main import cli


def test_validate_valid_entry(cli_runner, write_json, entry_dict):
    """Validation runs offline and reports totals."""
    path = write_json(entry_dict())

    result = cli_runner.invoke(cli, ["journal", "validate", path], env={"ERPNEXT_URL": ""})

    assert result.exit_code == 0
    assert "Valid: Yes" in result.output
    assert "Total Debit: 100.00" in result.output


def test_validate_unbalanced_entry(invoke, write_json, entry_dict):
    """Invalid entries exit with status 1 and list the errors."""
    path = write_json(entry_dict(debit=100, credit=90))

    result = invoke("journal", "validate", path)

    assert result.exit_code == 1
    assert "Valid: No" in result.output
    assert "Debits (100.00) do not equal credits (90.00)" in result.output


def test_validate_bad_json(invoke, tmp_path):
    """Malformed JSON is reported as an error."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = invoke("journal", "validate", str(path))

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_create_entry(invoke, gateway, write_json, entry_dict):
    """Create prints the new entry name."""
    path = write_json(entry_dict())

    result = invoke("journal", "create", path)

    assert result.exit_code == 0
    assert "Journal Entry created successfully: ACC-JV-00001" in result.output
    assert gateway.documents("Journal Entry")[0]["user_remark"] == "Office supplies"


def test_create_and_submit(invoke, gateway, write_json, entry_dict):
    """--submit posts the entry after creating it."""
    path = write_json({"journal_entry": entry_dict()})

    result = invoke("journal", "create", path, "--submit")

    assert result.exit_code == 0
    assert "submitted (posted) successfully" in result.output
    assert gateway.documents("Journal Entry")[0]["docstatus"] == 1


def test_create_invalid_entry_is_not_sent(invoke, gateway, write_json, entry_dict):
    """Invalid entries fail without reaching the ledger."""
    path = write_json(entry_dict(debit=100, credit=90))

    result = invoke("journal", "create", path)

    assert result.exit_code == 1
    assert "Journal entry validation failed" in result.output
    assert gateway.calls == []


def test_create_requires_authentication(cli_runner, write_json, entry_dict):
    """Ledger commands refuse to run without credentials."""
    from erpledger.gateway.memory import InMemoryGateway

    path = write_json(entry_dict())

    result = cli_runner.invoke(
        cli, ["journal", "create", path], obj={"gateway": InMemoryGateway(authenticated=False)}
    )

    assert result.exit_code == 1
    assert "Not authenticated with ERPNext" in result.output


def test_create_without_url(cli_runner, write_json, entry_dict):
    """A missing ERPNEXT_URL is reported clearly."""
    path = write_json(entry_dict())

    result = cli_runner.invoke(cli, ["journal", "create", path], env={"ERPNEXT_URL": ""})

    assert result.exit_code == 1
    assert "ERPNEXT_URL environment variable is required" in result.output


def test_submit_entry(invoke, gateway):
    """Submit prints the updated record."""
    name = gateway.add_document("Journal Entry", {"company": "ABC Corp"})

    result = invoke("journal", "submit", name)

    assert result.exit_code == 0
    assert f"Journal Entry {name} submitted successfully" in result.output
    assert gateway.documents("Journal Entry")[0]["docstatus"] == 1


def test_submit_unknown_entry(invoke):
    """Gateway failures exit with status 1."""
    result = invoke("journal", "submit", "ACC-JV-99999")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_batch_partial_failure_succeeds_at_envelope(invoke, gateway, write_json, entry_dict):
    """Mixed outcomes exit 0 with per-entry detail and the non-atomic note."""
    path = write_json(
        [entry_dict(), entry_dict(debit=100, credit=90), entry_dict()], name="batch.json"
    )

    result = invoke("journal", "batch", path)

    assert result.exit_code == 0
    assert "Batch complete: 2 created, 1 failed, 0 not attempted" in result.output
    assert "#1    created ACC-JV-00001" in result.output
    assert "#2    validation failed" in result.output
    assert "#3    created ACC-JV-00002" in result.output
    assert "batches are not atomic" in result.output


def test_batch_stop_on_error(invoke, gateway, write_json, entry_dict):
    """--stop-on-error leaves later entries untouched."""
    path = write_json(
        {"entries": [entry_dict(), entry_dict(debit=1, credit=2), entry_dict()]}, name="batch.json"
    )

    result = invoke("journal", "batch", path, "--stop-on-error")

    assert result.exit_code == 0
    assert "1 created, 1 failed, 1 not attempted" in result.output
    assert "#3    not attempted" in result.output
    assert len(gateway.documents("Journal Entry")) == 1


def test_batch_submit_failure_is_reported(invoke, gateway, write_json, entry_dict):
    """A failed submit is shown on the created entry."""
    gateway.fail_when("submit", "Period closed")
    path = write_json([entry_dict()], name="batch.json")

    result = invoke("journal", "batch", path, "--submit")

    assert result.exit_code == 0
    assert "created ACC-JV-00001 (NOT submitted" in result.output


def test_batch_empty_file_fails(invoke, gateway, write_json):
    """An empty batch is an outright failure."""
    path = write_json([], name="batch.json")

    result = invoke("journal", "batch", path)

    assert result.exit_code == 1
    assert gateway.calls == []


def test_bank_entry_prints_payload(invoke, gateway):
    """Without --create the balanced entry is printed."""
    result = invoke(
        "journal", "bank-entry",
        "--kind", "expense",
        "--amount", "$45.50",
        "--account", "5200 - Office Supplies - ABC",
        "--bank-account", "1111 - Checking - ABC",
        "--date", "2025-01-20",
        "--company", "ABC Corp",
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["posting_date"] == "2025-01-20"
    assert payload["accounts"][0]["debit_in_account_currency"] == 45.5
    assert payload["accounts"][1]["account"] == "1111 - Checking - ABC"
    assert gateway.calls == []


def test_bank_entry_create(invoke, gateway):
    """--create sends the entry to the ledger."""
    result = invoke(
        "journal", "bank-entry",
        "--kind", "income",
        "--amount", "1500",
        "--account", "4100 - Sales - ABC",
        "--bank-account", "1111 - Checking - ABC",
        "--company", "ABC Corp",
        "--create",
    )

    assert result.exit_code == 0
    assert "Journal Entry created successfully" in result.output
    assert gateway.documents("Journal Entry")[0]["accounts"][0]["account"] == "1111 - Checking - ABC"


def test_bank_entry_sign_decides_kind(invoke):
    """Without --kind a negative amount is an expense paid from the bank."""
    result = invoke(
        "journal", "bank-entry",
        "--amount=-45.50",
        "--account", "5200 - Office Supplies - ABC",
        "--bank-account", "1111 - Checking - ABC",
        "--date", "2025-01-20",
        "--company", "ABC Corp",
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["accounts"][0]["account"] == "5200 - Office Supplies - ABC"
    assert payload["accounts"][0]["debit_in_account_currency"] == 45.5
    assert payload["accounts"][1]["account"] == "1111 - Checking - ABC"
    assert payload["accounts"][1]["credit_in_account_currency"] == 45.5


def test_bank_entry_positive_amount_is_income(invoke):
    """Without --kind a positive amount debits the bank."""
    result = invoke(
        "journal", "bank-entry",
        "--amount", "1500",
        "--account", "4100 - Sales - ABC",
        "--bank-account", "1111 - Checking - ABC",
        "--company", "ABC Corp",
    )

    assert result.exit_code == 0
    assert json.loads(result.output)["accounts"][0]["account"] == "1111 - Checking - ABC"


def test_bank_entry_zero_amount_fails(invoke):
    """A zero amount cannot be booked."""
    result = invoke(
        "journal", "bank-entry",
        "--amount", "0",
        "--account", "4100 - Sales - ABC",
        "--bank-account", "1111 - Checking - ABC",
        "--company", "ABC Corp",
    )

    assert result.exit_code == 1
    assert "amount must be positive" in result.output


def test_create_dry_run_leaves_ledger_untouched(invoke, gateway, write_json, entry_dict):
    """--dry-run creates and submits against an in-memory ledger."""
    path = write_json(entry_dict())

    result = invoke("journal", "create", path, "--submit", "--dry-run")

    assert result.exit_code == 0
    assert "Journal Entry created successfully: ACC-JV-00001" in result.output
    assert "submitted (posted) successfully" in result.output
    assert "Dry run: nothing was sent to ERPNext." in result.output
    assert gateway.calls == []


def test_batch_dry_run_needs_no_configuration(cli_runner, write_json, entry_dict):
    """A dry-run batch works without ERPNEXT_URL or credentials."""
    path = write_json([entry_dict(), entry_dict(debit=100, credit=90)], name="batch.json")

    result = cli_runner.invoke(
        cli,
        ["journal", "batch", path, "--dry-run"],
        env={"ERPNEXT_URL": "", "ERPNEXT_API_KEY": "", "ERPNEXT_API_SECRET": ""},
    )

    assert result.exit_code == 0
    assert "Batch complete: 1 created, 1 failed, 0 not attempted" in result.output
    assert "#1    created ACC-JV-00001" in result.output
    assert "Dry run: nothing was sent to ERPNext." in result.output
