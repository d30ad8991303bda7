"""Company commands."""

import click

from erpledger.cli.error_handling import handle_domain_error
from erpledger.cli.gateway_context import get_gateway
from erpledger.domain.account import AccountService
from erpledger.domain.errors import GatewayError


@click.group()
def company_group():
    """List companies."""
    pass


@company_group.command("list")
@click.pass_context
def list_companies(ctx):
    """List companies with their abbreviation and parent company."""
    try:
        companies = AccountService(get_gateway(ctx)).list_companies()
    except GatewayError as e:
        handle_domain_error(ctx, e)

    if not companies:
        click.echo("No companies found.")
        return

    click.echo("\nCompanies:")
    click.echo("-" * 80)
    for company in companies:
        parent = company.get("parent_company") or "-"
        click.echo(
            f"{company['name']:30s} | {company.get('abbr') or '':6s} | "
            f"{company.get('default_currency') or '':4s} | Parent: {parent}"
        )


def register_commands(cli: click.Group) -> None:
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
