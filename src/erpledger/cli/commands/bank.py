"""Bank transaction commands."""

import csv
import json

import click

from erpledger.cli.date_filters import period_options, resolve_cli_date_range
from erpledger.cli.error_handling import handle_domain_error
from erpledger.cli.gateway_context import get_gateway
from erpledger.domain.bank_transaction import BankTransactionService
from erpledger.domain.entities import BankTransactionQuery, TransactionStatus
from erpledger.domain.errors import DomainError, GatewayError
from erpledger.utils.amount_parser import parse_amount


def read_statement(csv_file: str) -> tuple[list[str], list[list[str]]]:
    """Read a bank statement CSV into (columns, rows).

    The delimiter is sniffed; blank lines are dropped.
    """
    with open(csv_file, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(1024)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
        except csv.Error:
            delimiter = ","

        reader = csv.reader(f, delimiter=delimiter)
        columns = next(reader, None)
        if not columns:
            raise ValueError("CSV file has no columns")
        rows = [row for row in reader if any(cell.strip() for cell in row)]

    return [c.strip() for c in columns], rows


@click.group()
def bank_group():
    """Search, import and list bank transactions."""
    pass


@bank_group.command("search")
@click.option("--bank-account", help="Bank Account name")
@click.option("--company", help="Company name")
@click.option(
    "--status",
    type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False),
    help="Reconciliation status",
)
@click.option("--from-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--to-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--min-amount", help="Minimum amount (deposit or withdrawal)")
@click.option("--max-amount", help="Maximum amount (deposit or withdrawal)")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def search_transactions(
    ctx,
    bank_account: str | None,
    company: str | None,
    status: str | None,
    from_date: str | None,
    to_date: str | None,
    this_month: bool,
    this_year: bool,
    this_week: bool,
    last_month: bool,
    last_year: bool,
    last_week: bool,
    min_amount: str | None,
    max_amount: str | None,
    as_json: bool,
):
    """Search bank transactions, e.g. to find candidates for reconciliation.

    Amounts are compared against the deposit, or the withdrawal when there
    is no deposit.

    Examples:
        erpledger bank search --bank-account "Checking - ABC" --status Unreconciled
        erpledger bank search --last-month --min-amount 100 --max-amount 1000
    """
    start, end = resolve_cli_date_range(
        ctx,
        from_date=from_date,
        to_date=to_date,
        period_flags={
            "this_month": this_month,
            "this_year": this_year,
            "this_week": this_week,
            "last_month": last_month,
            "last_year": last_year,
            "last_week": last_week,
        },
    )

    try:
        query = BankTransactionQuery(
            bank_account=bank_account,
            company=company,
            status=_status(status),
            from_date=start,
            to_date=end,
            min_amount=parse_amount(min_amount) if min_amount else None,
            max_amount=parse_amount(max_amount) if max_amount else None,
        )
        transactions = BankTransactionService(get_gateway(ctx)).search(query)
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(
            json.dumps(
                [{**vars(t), "status": t.status.value} for t in transactions],
                indent=2,
                default=str,
            )
        )
        return

    if not transactions:
        click.echo("No bank transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} bank transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'Name':<22} {'Date':<12} {'Deposit':>12} {'Withdrawal':>12} {'Status':<13} {'Description':<35}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(
            f"{txn.name:<22} {str(txn.date):<12} {txn.deposit:>12,.2f} {txn.withdrawal:>12,.2f} "
            f"{txn.status.value:<13} {txn.description[:35]:<35}"
        )
    click.echo("-" * 110)
    total_deposits = sum(t.deposit for t in transactions)
    total_withdrawals = sum(t.withdrawal for t in transactions)
    click.echo(
        f"{'TOTAL':<35} {total_deposits:>12,.2f} {total_withdrawals:>12,.2f} Count: {len(transactions)}"
    )


def _status(value: str | None) -> TransactionStatus | None:
    if value is None:
        return None
    for status in TransactionStatus:
        if status.value.lower() == value.lower():
            return status
    raise ValueError(f"Unknown status '{value}'")


@bank_group.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--bank-account", required=True, help="Bank Account the transactions belong to")
@click.pass_context
def import_transactions(ctx, csv_file: str, bank_account: str):
    """Import a bank statement CSV with ERPNext's bank entry upload.

    The header row is sent as the column list and every other row as data;
    ERPNext maps the columns using the Bank's import settings.

    Examples:
        erpledger bank import statement.csv --bank-account "Checking - ABC"
    """
    try:
        columns, rows = read_statement(csv_file)
        result = BankTransactionService(get_gateway(ctx)).batch_import(columns, rows, bank_account)
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Bank transactions imported ({len(rows)} rows sent):\n")
    click.echo(json.dumps(result, indent=2, default=str))


@bank_group.command("accounts")
@click.option("--company", help="Only bank accounts of this company")
@click.pass_context
def list_bank_accounts(ctx, company: str | None):
    """List bank accounts."""
    try:
        accounts = BankTransactionService(get_gateway(ctx)).list_bank_accounts(company)
    except (DomainError, GatewayError) as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 90)
    for acc in accounts:
        flags = []
        if acc.is_default:
            flags.append("default")
        if acc.disabled:
            flags.append("disabled")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"{acc.name:30s} | {acc.bank or '':15s} | GL: {acc.account or '-'}{suffix}")


def register_commands(cli: click.Group) -> None:
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
