"""CLI helpers for date range resolution."""

from datetime import date

import click

from erpledger.cli.error_handling import handle_domain_error
from erpledger.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]


def period_options(command):
    """Add the --this-month ... --last-week flags to a command."""
    for period in reversed(PERIOD_OPTIONS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Limit to {period.replace('-', ' ')}",
        )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    from_date: str | None,
    to_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve a date range from one period flag or explicit --from-date/--to-date."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        handle_domain_error(ctx, ValueError("Only one period option can be specified at a time."))
    if selected and (from_date or to_date):
        handle_domain_error(
            ctx, ValueError("Period options cannot be combined with --from-date or --to-date.")
        )

    if selected:
        return get_date_range(selected[0].replace("_", "-"))

    start = end = None
    try:
        if from_date:
            start = parse_date(from_date)
        if to_date:
            end = parse_date(to_date)
    except ValueError as e:
        handle_domain_error(ctx, e)
    return start, end
