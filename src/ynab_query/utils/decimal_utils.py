"""Decimal utilities for monetary calculations.

All monetary calculations must use Decimal to avoid floating-point precision issues.
Amounts from the budgeting API arrive as integer milliunits (1/1000 of a currency unit).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

MILLIUNITS_PER_UNIT = Decimal("1000")
ZERO = Decimal("0")
CENTS = Decimal("0.01")


def milliunits_to_decimal(milliunits: int) -> Decimal:
    """Convert a signed milliunit amount to major currency units.

    Args:
        milliunits: Amount in milliunits (e.g. -12340 for -12.34).

    Returns:
        Exact Decimal amount in major units.
    """
    return Decimal(int(milliunits)) / MILLIUNITS_PER_UNIT


def split_amount(milliunits: int) -> tuple[Decimal, Decimal]:
    """Split a signed milliunit amount into (inflow, outflow).

    Both values are non-negative. A zero amount yields (0, 0).

    Args:
        milliunits: Signed amount in milliunits.

    Returns:
        Tuple of (inflow, outflow) in major units.
    """
    amount = milliunits_to_decimal(milliunits)
    if amount > 0:
        return amount, ZERO
    if amount < 0:
        return ZERO, -amount
    return ZERO, ZERO


def round_money(amount: Decimal) -> Decimal:
    """Round an amount to cents using half-up rounding.

    Args:
        amount: The amount to round.

    Returns:
        Amount quantized to two decimal places.
    """
    rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if rounded == 0:
        return Decimal("0.00")  # Normalize -0.00 to 0.00
    return rounded


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum Decimal amounts.

    Args:
        amounts: Decimal amounts.

    Returns:
        Sum as Decimal.
    """
    total = ZERO
    for amount in amounts:
        total += amount
    return total
