"""Amount parsing utilities."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union
import re

CENT = Decimal("0.01")


def parse_amount(amount_str: Union[str, int, float, Decimal, None]) -> Decimal:
    """Parse an amount into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Numbers are accepted as-is; floats go through ``str`` so that 45.5 stays
    45.5 instead of its binary expansion. ``None`` and the empty string are
    zero, the way the ledger treats blank debit/credit cells.

    Args:
        amount_str: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None:
        return Decimal("0")
    if isinstance(amount_str, bool):
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if isinstance(amount_str, Decimal):
        return amount_str
    if isinstance(amount_str, (int, float)):
        return Decimal(str(amount_str))

    # Remove whitespace
    amount_str = amount_str.strip()
    if not amount_str:
        return Decimal("0")

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.replace(" ", "").strip()

    try:
        amount = Decimal(amount_str)
    except Exception as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def to_cents(amount: Decimal) -> Decimal:
    """Round an amount to the nearest cent."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def split_signed_amount(amount: Union[str, int, float, Decimal]) -> tuple[Decimal, Decimal]:
    """Split a signed bank amount into (deposit, withdrawal).

    Non-negative amounts are deposits, negative amounts withdrawals. Both
    parts are returned unsigned.
    """
    value = parse_amount(amount)
    if value >= 0:
        return abs(value), Decimal("0")
    return Decimal("0"), abs(value)
