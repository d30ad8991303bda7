"""Journal entry commands."""

import json

import click

from erpledger.cli.error_handling import handle_domain_error
from erpledger.cli.gateway_context import get_gateway, start_dry_run
from erpledger.cli.journal_files import load_draft, load_drafts
from erpledger.domain.batch import BatchOrchestrator
from erpledger.domain.entities import (
    Created,
    GatewayFailed,
    JournalEntryDraft,
    NotAttempted,
    ValidationFailed,
    ValidationResult,
)
from erpledger.domain.errors import DomainError, GatewayError, JournalEntryInvalidError
from erpledger.domain.journal_entry import JournalEntryService, build_bank_journal_entry
from erpledger.domain.validation import validate_journal_entry
from erpledger.gateway.mappers import draft_to_payload
from erpledger.utils.amount_parser import split_signed_amount
from erpledger.utils.date_parser import parse_date


def _echo_validation(result: ValidationResult) -> None:
    click.echo("Journal Entry Validation Result:\n")
    click.echo(f"  Valid: {'Yes' if result.valid else 'No'}")
    click.echo(f"  Total Debit: {result.total_debit:,.2f}")
    click.echo(f"  Total Credit: {result.total_credit:,.2f}")
    click.echo(f"  Difference: {result.difference:,.2f}")
    if result.errors:
        click.echo("\nErrors:")
        for error in result.errors:
            click.echo(f"  - {error}")
    if result.warnings:
        click.echo("\nWarnings:")
        for warning in result.warnings:
            click.echo(f"  - {warning}")


def _echo_record(record: dict) -> None:
    click.echo(json.dumps(record, indent=2, default=str))


def _create_and_report(ctx, draft: JournalEntryDraft, skip_validation: bool, submit: bool) -> None:
    service = JournalEntryService(get_gateway(ctx))
    try:
        record = service.create(draft, skip_validation=skip_validation, auto_submit=submit)
    except JournalEntryInvalidError as e:
        _echo_validation(e.result)
        handle_domain_error(ctx, e)
    except (DomainError, GatewayError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Journal Entry created successfully: {record.get('name')}")
    if submit:
        click.echo("Journal Entry submitted (posted) successfully.")
    click.echo("")
    _echo_record(record)


@click.group()
def journal_group():
    """Validate, create and submit journal entries."""
    pass


@journal_group.command("validate")
@click.argument("entry_file", type=click.File("r"))
@click.pass_context
def validate_entry(ctx, entry_file):
    """Check that a journal entry balances. Works offline.

    ENTRY_FILE is an ERPNext-shaped JSON object with posting_date, company
    and an accounts array ("-" reads stdin). Exits with status 1 when the
    entry is invalid.

    Examples:
        erpledger journal validate entry.json
    """
    try:
        draft = load_draft(entry_file)
    except DomainError as e:
        handle_domain_error(ctx, e)

    result = validate_journal_entry(draft)
    _echo_validation(result)
    if not result.valid:
        ctx.exit(1)


@journal_group.command("create")
@click.argument("entry_file", type=click.File("r"))
@click.option("--skip-validation", is_flag=True, help="Send the entry without validating it first")
@click.option("--submit", is_flag=True, help="Submit (post) the entry after creating it")
@click.option("--dry-run", is_flag=True, help="Use an in-memory ledger; nothing is sent to ERPNext")
@click.pass_context
def create_entry(ctx, entry_file, skip_validation: bool, submit: bool, dry_run: bool):
    """Create a journal entry from a JSON file.

    Examples:
        erpledger journal create entry.json
        erpledger journal create entry.json --submit
        erpledger journal create entry.json --submit --dry-run
    """
    try:
        draft = load_draft(entry_file)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if dry_run:
        start_dry_run(ctx)
    _create_and_report(ctx, draft, skip_validation, submit)
    if dry_run:
        click.echo("\nDry run: nothing was sent to ERPNext.")


@journal_group.command("submit")
@click.argument("name", metavar="JOURNAL_ENTRY_NAME")
@click.pass_context
def submit_entry(ctx, name: str):
    """Submit (post) a draft journal entry.

    Submitted entries can no longer be edited.

    Examples:
        erpledger journal submit ACC-JV-2025-00001
    """
    service = JournalEntryService(get_gateway(ctx))
    try:
        record = service.submit(name)
    except (DomainError, GatewayError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Journal Entry {name} submitted successfully:\n")
    _echo_record(record)


@journal_group.command("batch")
@click.argument("batch_file", type=click.File("r"))
@click.option("--submit", is_flag=True, help="Submit each entry after creating it")
@click.option("--stop-on-error", is_flag=True, help="Skip all remaining entries after the first failure")
@click.option("--dry-run", is_flag=True, help="Use an in-memory ledger; nothing is sent to ERPNext")
@click.pass_context
def batch_create(ctx, batch_file, submit: bool, stop_on_error: bool, dry_run: bool):
    """Create many journal entries, one after another.

    BATCH_FILE holds a JSON list of entries (or {"entries": [...]}). Every
    entry gets its own outcome. Batches are not atomic: entries created
    before a failure stay in the ledger, and running the same file again
    creates them again.

    Examples:
        erpledger journal batch entries.json
        erpledger journal batch entries.json --submit --stop-on-error
        erpledger journal batch entries.json --dry-run
    """
    try:
        drafts = load_drafts(batch_file)
        if dry_run:
            start_dry_run(ctx)
        result = BatchOrchestrator(get_gateway(ctx)).run(
            drafts, auto_submit=submit, stop_on_error=stop_on_error
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Batch complete: {result.success_count} created, {result.error_count} failed, "
        f"{result.not_attempted_count} not attempted"
    )
    click.echo("-" * 80)
    for outcome in result.outcomes:
        label = f"#{outcome.index + 1}"
        if isinstance(outcome, Created):
            if outcome.submitted:
                click.echo(f"{label:<5} created {outcome.name} (submitted)")
            elif outcome.submit_error:
                click.echo(f"{label:<5} created {outcome.name} (NOT submitted: {outcome.submit_error})")
            else:
                click.echo(f"{label:<5} created {outcome.name}")
        elif isinstance(outcome, ValidationFailed):
            click.echo(f"{label:<5} validation failed: {'; '.join(outcome.errors)}")
        elif isinstance(outcome, GatewayFailed):
            click.echo(f"{label:<5} failed: {outcome.message}")
        elif isinstance(outcome, NotAttempted):
            click.echo(f"{label:<5} not attempted")

    if result.success_count and (result.error_count or result.not_attempted_count):
        click.echo("-" * 80)
        click.echo(
            "Note: batches are not atomic. Created entries were not rolled back; "
            "do not re-run the whole file or they will be created twice."
        )
    if dry_run:
        click.echo("\nDry run: nothing was sent to ERPNext.")


@journal_group.command("bank-entry")
@click.option(
    "--kind",
    type=click.Choice(["income", "expense"]),
    help="Direction of the movement (default: from the sign of --amount)",
)
@click.option("--amount", required=True, help="Amount; negative for a withdrawal (e.g., -123.45)")
@click.option("--account", "counter_account", required=True, help="Income or expense ledger account")
@click.option("--bank-account", required=True, help="Ledger account of the bank")
@click.option("--date", "posting_date", default="today", show_default=True, help="Posting date")
@click.option("--company", required=True, help="Company name")
@click.option("--description", help="Remark for the entry")
@click.option("--create", "create_it", is_flag=True, help="Create the entry instead of printing it")
@click.option("--submit", is_flag=True, help="Submit the entry after creating it (implies --create)")
@click.pass_context
def bank_entry(
    ctx,
    kind: str | None,
    amount: str,
    counter_account: str,
    bank_account: str,
    posting_date: str,
    company: str,
    description: str | None,
    create_it: bool,
    submit: bool,
):
    """Build the two-line journal entry for a bank deposit or payment.

    Income debits the bank and credits --account; expense debits --account
    and credits the bank. Without --kind, a positive --amount is a deposit
    (income) and a negative one a withdrawal (expense). Without --create the
    entry is printed as JSON.

    Examples:
        erpledger journal bank-entry --kind expense --amount 45.50 \\
            --account "5200 - Office Supplies - ABC" \\
            --bank-account "1111 - Checking - ABC" --company "ABC Corp"
        erpledger journal bank-entry --amount=-45.50 --account "5200 - Office Supplies - ABC" \\
            --bank-account "1111 - Checking - ABC" --company "ABC Corp"
    """
    try:
        deposit, withdrawal = split_signed_amount(amount)
        if kind is None:
            kind = "income" if deposit else "expense"
        draft = build_bank_journal_entry(
            kind=kind,
            amount=deposit or withdrawal,
            counter_account=counter_account,
            bank_account=bank_account,
            posting_date=parse_date(posting_date),
            company=company,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not (create_it or submit):
        _echo_record(draft_to_payload(draft))
        return

    _create_and_report(ctx, draft, skip_validation=False, submit=submit)


def register_commands(cli: click.Group) -> None:
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
