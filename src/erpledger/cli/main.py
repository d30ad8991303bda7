"""Main CLI entry point."""

import click

from erpledger.utils.logging_config import setup_logging

# Import and register all commands at module level
from erpledger.cli.commands import account, bank, company, journal


@click.group()
@click.option("--url", envvar="ERPNEXT_URL", help="ERPNext site URL (overrides ERPNEXT_URL)")
@click.option("--api-key", envvar="ERPNEXT_API_KEY", help="API key (overrides ERPNEXT_API_KEY)")
@click.option(
    "--api-secret", envvar="ERPNEXT_API_SECRET", help="API secret (overrides ERPNEXT_API_SECRET)"
)
@click.option(
    "--timeout",
    type=float,
    envvar="ERPNEXT_TIMEOUT",
    help="Request timeout in seconds (default 30)",
)
@click.option(
    "--log-level",
    envvar="ERPLEDGER_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Console log level",
)
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write a debug log to this file")
@click.pass_context
def cli(
    ctx,
    url: str | None,
    api_key: str | None,
    api_secret: str | None,
    timeout: float | None,
    log_level: str,
    log_file: str | None,
):
    """erpledger - Journal entries and bank transactions for ERPNext.

    Validate and batch-create journal entries, search and import bank
    transactions, and browse the chart of accounts of an ERPNext ledger.
    """
    ctx.ensure_object(dict)
    setup_logging(level=log_level, log_file=log_file)

    # The gateway itself is created on first use (see gateway_context), so
    # offline commands and --help need no configuration.
    ctx.obj["settings"] = {
        "url": url,
        "api_key": api_key,
        "api_secret": api_secret,
        "timeout": timeout,
    }


# Register all commands
journal.register_commands(cli)
bank.register_commands(cli)
account.register_commands(cli)
company.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
