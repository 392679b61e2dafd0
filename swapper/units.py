"""Conversion between human-readable token amounts and raw base units.

All conversions run in a high-precision Decimal context so that uint256-sized
values (up to ~10^77) round-trip without rounding artifacts.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from swapper.models.types import validate_uint256

# 78 digits of precision covers every uint256 value (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

# ERC20 decimals are a uint8
MAX_DECIMALS = 255


def _check_decimals(decimals: int) -> None:
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"Token decimals must be in [0, {MAX_DECIMALS}], got {decimals}")


def parse_units(amount: Decimal | int | str, decimals: int) -> int:
    """Convert a human-readable amount into raw base units.

    Args:
        amount: Amount in whole tokens (e.g., "100" or Decimal("98.5"))
        decimals: Token decimals

    Returns:
        Amount in base units

    Raises:
        ValueError: If the amount is negative, not a number, or has more
            fractional digits than the token supports
    """
    _check_decimals(decimals)
    if isinstance(amount, float):
        raise TypeError("Pass amounts as str, int or Decimal, not float")

    try:
        value = Decimal(amount)
    except decimal.InvalidOperation as err:
        raise ValueError(f"Invalid token amount: {amount!r}") from err
    if not value.is_finite():
        raise ValueError(f"Invalid token amount: {amount!r}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
        return validate_uint256(int(scaled))


def format_units(raw_amount: int, decimals: int) -> Decimal:
    """Convert raw base units into a human-readable Decimal.

    Trailing zeros are stripped, so 98_500_000 with 6 decimals is Decimal("98.5").
    """
    _check_decimals(decimals)
    validate_uint256(raw_amount)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        value = Decimal(raw_amount).scaleb(-decimals)
        if value == value.to_integral_value():
            return value.quantize(Decimal(1))
        return value.normalize()


def apply_slippage(amount: int, slippage_bps: int) -> int:
    """Reduce an amount by a slippage tolerance in basis points (floor).

    A tolerance of 0 returns the amount unchanged.
    """
    if not 0 <= slippage_bps <= 10_000:
        raise ValueError(f"Slippage must be in [0, 10000] bps, got {slippage_bps}")
    return amount * (10_000 - slippage_bps) // 10_000


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "parse_units",
    "format_units",
    "apply_slippage",
]
