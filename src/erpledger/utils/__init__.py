"""Utility functions for erpledger."""

from erpledger.utils.date_parser import parse_date, format_date
from erpledger.utils.amount_parser import parse_amount, split_signed_amount, to_cents
from erpledger.utils.logging_config import setup_logging

__all__ = [
    "parse_date",
    "format_date",
    "parse_amount",
    "split_signed_amount",
    "to_cents",
    "setup_logging",
]
