"""
Monetary calculator.

Pure Decimal arithmetic for platform fees and net payouts.

CRITICAL: Always use Decimal, never float!
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, str]


def money(value: Optional[Number]) -> Decimal:
    """Quantize a value to 2 places using round-half-up. None becomes 0.00."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def platform_fee(gross_value: Optional[Decimal], percent_rate: Optional[Decimal]) -> Decimal:
    """
    Fee taken by the platform from a gross amount.

    Absent or non-positive inputs yield 0.00. A zero result therefore does not
    mean "no rate configured"; callers that care must check the rate themselves.

    Args:
        gross_value: Amount the fee is taken from
        percent_rate: Commission in percent (10 means 10%)

    Returns:
        round(gross * rate / 100, 2, HALF_UP)
    """
    if gross_value is None or percent_rate is None:
        return ZERO
    if gross_value <= 0 or percent_rate <= 0:
        return ZERO
    return money(gross_value * percent_rate / HUNDRED)


def net_value(gross_value: Optional[Decimal], fee: Optional[Decimal]) -> Decimal:
    """
    Gross minus fee, clamped at zero.

    Args:
        gross_value: Gross amount
        fee: Fee already computed for that gross

    Returns:
        Net amount, never negative
    """
    if gross_value is None:
        return ZERO
    if fee is None:
        return money(gross_value)
    net = gross_value - fee
    if net < 0:
        return ZERO
    return money(net)
