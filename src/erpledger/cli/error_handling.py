"""CLI error handling helpers."""

import click

from erpledger.domain.errors import DomainError, GatewayError


def handle_domain_error(ctx: click.Context, error: DomainError | GatewayError | ValueError) -> None:
    """Render a domain or gateway error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
