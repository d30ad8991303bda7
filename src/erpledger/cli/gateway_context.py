"""CLI helpers for obtaining the ledger gateway."""

import logging

import click

from erpledger.cli.error_handling import handle_domain_error
from erpledger.domain.errors import ConfigurationError, not_authenticated
from erpledger.gateway.base import LedgerGateway
from erpledger.gateway.factories import create_http_gateway
from erpledger.gateway.memory import InMemoryGateway

logger = logging.getLogger(__name__)


def get_gateway(ctx: click.Context, require_auth: bool = True) -> LedgerGateway:
    """Return the gateway for this invocation, creating it on first use.

    Commands that work offline (like ``journal validate``) never call this,
    so they run without any ledger configuration. A gateway placed in
    ``ctx.obj["gateway"]`` beforehand is used as-is.
    """
    obj = ctx.find_root().obj
    gateway = obj.get("gateway")
    if gateway is None:
        settings = obj.get("settings", {})
        try:
            gateway = create_http_gateway(
                url=settings.get("url"),
                api_key=settings.get("api_key"),
                api_secret=settings.get("api_secret"),
                timeout=settings.get("timeout"),
            )
        except ConfigurationError as e:
            handle_domain_error(ctx, e)
        obj["gateway"] = gateway
        ctx.find_root().call_on_close(gateway.close)

    if require_auth and not gateway.is_authenticated:
        click.echo(f"Error: {not_authenticated()}", err=True)
        ctx.exit(1)
    return gateway


def start_dry_run(ctx: click.Context) -> InMemoryGateway:
    """Point this invocation at an empty in-memory ledger.

    Entries still go through validation, naming and submission, but nothing
    is sent to ERPNext and no configuration is needed.
    """
    gateway = InMemoryGateway()
    ctx.find_root().obj["gateway"] = gateway
    logger.info("Dry run: using an in-memory ledger")
    return gateway
