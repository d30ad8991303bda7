"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from erpledger.cli.date_filters import resolve_cli_date_range
from erpledger.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this_month": True, "last_month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), from_date=None, to_date=None, period_flags=period_flags)

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_period_with_dates(capsys):
    period_flags = {"this_month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), from_date="2025-01-01", to_date=None, period_flags=period_flags)

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    period_flags = {"last_week": True, "this_month": False}

    start, end = resolve_cli_date_range(_ctx(), from_date=None, to_date=None, period_flags=period_flags)

    assert (start, end) == get_date_range("last-week")


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(), from_date="2025-01-02", to_date="2025-01-05", period_flags={}
    )

    assert start == date(2025, 1, 2)
    assert end == date(2025, 1, 5)


def test_resolve_cli_date_range_open_ended():
    start, end = resolve_cli_date_range(_ctx(), from_date=None, to_date="2025-01-05", period_flags={})

    assert start is None
    assert end == date(2025, 1, 5)


def test_resolve_cli_date_range_rejects_bad_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), from_date="someday", to_date=None, period_flags={})

    assert "Invalid date format" in capsys.readouterr().err
