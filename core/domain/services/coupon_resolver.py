"""
Coupon/discount resolver.

Validates a coupon against an order subtotal and computes the discount.
Redemption (the usage increment) is not done here; it belongs to the
order-creation unit of work.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ..enums import DiscountType
from ..exceptions import (
    CouponExhausted,
    CouponExpired,
    CouponInactive,
    CouponMinimumNotMet,
    CouponNotFound,
)
from .monetary import money, platform_fee

if TYPE_CHECKING:
    from ..entities.coupon import Coupon


logger = logging.getLogger(__name__)


def validate_applicable(
    coupon: Optional["Coupon"],
    order_subtotal: Decimal,
    today: Optional[date] = None,
) -> "Coupon":
    """
    Check that a coupon can be applied to an order of the given subtotal.

    Args:
        coupon: Coupon to check (None when the code was not found)
        order_subtotal: Subtotal before discount and delivery fee
        today: Reference date (defaults to date.today())

    Returns:
        The same coupon, for chaining

    Raises:
        CouponNotFound: coupon is None
        CouponInactive: coupon is deactivated
        CouponExpired: today is outside the validity window
        CouponExhausted: usage cap reached
        CouponMinimumNotMet: subtotal below the coupon minimum
    """
    if coupon is None:
        raise CouponNotFound("Coupon not found")

    if not coupon.active:
        raise CouponInactive(f"Coupon {coupon.code} is inactive")

    today = today or date.today()
    if not coupon.is_within_validity(today):
        raise CouponExpired(f"Coupon {coupon.code} is outside its validity period")

    if coupon.is_exhausted():
        raise CouponExhausted(f"Coupon {coupon.code} reached its usage limit")

    if order_subtotal < coupon.minimum_order_value:
        raise CouponMinimumNotMet(
            f"Order subtotal {order_subtotal} is below the coupon minimum "
            f"{coupon.minimum_order_value}"
        )

    return coupon


def calculate_discount(coupon: Optional["Coupon"], subtotal: Decimal) -> Decimal:
    """
    Discount a coupon grants on a subtotal.

    Percentage coupons reuse the platform-fee routine so rounding is identical.
    Fixed coupons never exceed the subtotal.
    """
    if coupon is None:
        return money(0)

    if coupon.discount_type == DiscountType.PERCENTAGE:
        discount = platform_fee(subtotal, coupon.discount_value)
    else:
        discount = min(coupon.discount_value, subtotal)

    logger.debug(f"Coupon {coupon.code} grants {discount} on subtotal {subtotal}")
    return money(discount)
