"""Coupon enums."""
from enum import Enum


class DiscountType(str, Enum):
    """How a coupon value is interpreted."""

    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
