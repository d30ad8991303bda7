"""Chart of accounts commands."""

import json

import click

from erpledger.cli.error_handling import handle_domain_error
from erpledger.cli.gateway_context import get_gateway
from erpledger.domain.account import AccountService
from erpledger.domain.entities import LedgerAccount, RootType
from erpledger.domain.errors import GatewayError
from erpledger.utils.date_parser import parse_date


def _echo_accounts(accounts: list[LedgerAccount]) -> None:
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\nFound {len(accounts)} account(s):")
    click.echo("-" * 100)
    for acc in accounts:
        root = acc.root_type.value if acc.root_type else "-"
        group = " (group)" if acc.is_group else ""
        click.echo(f"{acc.name:45s} | {acc.account_type or '-':15s} | {root:9s}{group}")


@click.group()
def account_group():
    """Browse the chart of accounts."""
    pass


@account_group.command("tree")
@click.argument("company")
@click.option("--parent", help="Parent account (omit for the root accounts)")
@click.pass_context
def account_tree(ctx, company: str, parent: str | None):
    """Show one level of the account tree.

    Examples:
        erpledger account tree "ABC Corp"
        erpledger account tree "ABC Corp" --parent "Application of Funds (Assets) - ABC"
    """
    try:
        nodes = AccountService(get_gateway(ctx)).get_account_tree(company, parent)
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    if not nodes:
        click.echo("No accounts found.")
        return
    for node in nodes:
        marker = "+" if node.get("expandable") else "-"
        click.echo(f"{marker} {node.get('value') or node.get('title')}")


@account_group.command("balance")
@click.argument("account")
@click.option("--date", "on_date", help="Balance date (default today)")
@click.pass_context
def account_balance(ctx, account: str, on_date: str | None):
    """Show the balance of an account."""
    try:
        balance_date = parse_date(on_date) if on_date else None
        balance = AccountService(get_gateway(ctx)).get_balance(account, balance_date)
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"{account}: {balance:,.2f}")


@account_group.command("trial-balance")
@click.argument("company")
@click.option("--date", "as_of", help="As-of date (default today)")
@click.option("--show-zero", is_flag=True, help="Include accounts without movement")
@click.pass_context
def trial_balance(ctx, company: str, as_of: str | None, show_zero: bool):
    """Run the Trial Balance report for the current fiscal year."""
    try:
        as_of_date = parse_date(as_of) if as_of else None
        report = AccountService(get_gateway(ctx)).get_trial_balance(company, as_of_date, show_zero)
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    click.echo(json.dumps(report, indent=2, default=str))


@account_group.command("search")
@click.argument("company")
@click.argument("query")
@click.option("--limit", type=int, default=10, show_default=True, help="Maximum results")
@click.pass_context
def search_accounts(ctx, company: str, query: str, limit: int):
    """Find accounts by number or name.

    Examples:
        erpledger account search "ABC Corp" 1111
        erpledger account search "ABC Corp" checking
    """
    try:
        accounts = AccountService(get_gateway(ctx)).search_accounts(company, query, limit)
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    _echo_accounts(accounts)


@account_group.command("list")
@click.argument("company")
@click.option("--type", "account_type", help="Account type: Bank, Cash, Receivable, Payable, Tax ...")
@click.option(
    "--root-type",
    type=click.Choice([r.value for r in RootType]),
    help="Root type",
)
@click.option("--include-groups", is_flag=True, help="Include group accounts")
@click.pass_context
def list_accounts(ctx, company: str, account_type: str | None, root_type: str | None, include_groups: bool):
    """List accounts by account type or root type."""
    try:
        accounts = AccountService(get_gateway(ctx)).list_accounts(
            company,
            account_type=account_type,
            root_type=RootType(root_type) if root_type else None,
            include_groups=include_groups,
        )
    except (ValueError, GatewayError) as e:
        handle_domain_error(ctx, e)

    _echo_accounts(accounts)


def register_commands(cli: click.Group) -> None:
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
