"""Tests for coupon applicability and discount calculation."""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.entities import Coupon
from core.domain.enums import DiscountType
from core.domain.exceptions import (
    CouponExhausted,
    CouponExpired,
    CouponInactive,
    CouponMinimumNotMet,
    CouponNotFound,
    InvalidArgument,
)
from core.domain.services.coupon_resolver import calculate_discount, validate_applicable

TODAY = date(2026, 3, 15)


def make_coupon(**overrides) -> Coupon:
    fields = dict(
        code="welcome10",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=Decimal("10"),
        minimum_order_value=Decimal("20.00"),
        start_date=date(2026, 3, 1),
        end_date=date(2026, 3, 31),
        max_uses=100,
        current_uses=0,
        active=True,
    )
    fields.update(overrides)
    return Coupon(**fields)


class TestValidateApplicable:

    def test_valid_coupon_is_returned(self):
        coupon = make_coupon()
        assert validate_applicable(coupon, Decimal("50.00"), TODAY) is coupon

    def test_code_is_normalized(self):
        assert make_coupon().code == "WELCOME10"

    def test_missing_coupon(self):
        with pytest.raises(CouponNotFound):
            validate_applicable(None, Decimal("50.00"), TODAY)

    def test_inactive(self):
        with pytest.raises(CouponInactive):
            validate_applicable(make_coupon(active=False), Decimal("50.00"), TODAY)

    @pytest.mark.parametrize("today", [date(2026, 2, 28), date(2026, 4, 1)])
    def test_outside_validity_window(self, today):
        with pytest.raises(CouponExpired):
            validate_applicable(make_coupon(), Decimal("50.00"), today)

    @pytest.mark.parametrize("today", [date(2026, 3, 1), date(2026, 3, 31)])
    def test_window_bounds_are_inclusive(self, today):
        validate_applicable(make_coupon(), Decimal("50.00"), today)

    def test_exhausted(self):
        with pytest.raises(CouponExhausted):
            validate_applicable(make_coupon(max_uses=3, current_uses=3), Decimal("50.00"), TODAY)

    def test_minimum_not_met(self):
        with pytest.raises(CouponMinimumNotMet):
            validate_applicable(make_coupon(), Decimal("19.99"), TODAY)

    def test_minimum_is_inclusive(self):
        validate_applicable(make_coupon(), Decimal("20.00"), TODAY)

    def test_coupon_errors_are_invalid_arguments(self):
        """Test that every applicability failure maps to a client error."""
        for error in (CouponInactive, CouponExpired, CouponExhausted, CouponMinimumNotMet):
            assert issubclass(error, InvalidArgument)


class TestCalculateDiscount:

    def test_percentage(self):
        """Scenario C: 10% of 100.00."""
        assert calculate_discount(make_coupon(), Decimal("100.00")) == Decimal("10.00")

    def test_percentage_rounds_half_up(self):
        coupon = make_coupon(discount_value=Decimal("15"))
        assert calculate_discount(coupon, Decimal("33.30")) == Decimal("5.00")

    def test_fixed_amount(self):
        """Scenario B: fixed 5.00 off 30.00."""
        coupon = make_coupon(discount_type=DiscountType.FIXED_AMOUNT, discount_value=Decimal("5.00"))
        assert calculate_discount(coupon, Decimal("30.00")) == Decimal("5.00")

    def test_fixed_amount_capped_at_subtotal(self):
        coupon = make_coupon(discount_type=DiscountType.FIXED_AMOUNT, discount_value=Decimal("25.00"))
        assert calculate_discount(coupon, Decimal("18.40")) == Decimal("18.40")

    def test_no_coupon(self):
        assert calculate_discount(None, Decimal("30.00")) == Decimal("0.00")
