"""Tests for request validators."""

from datetime import date
from decimal import Decimal

import pytest

from core.application.dtos import (
    AddressDTO,
    CouponRequest,
    CreateOrderRequest,
    FeeConfigurationRequest,
    OrderItemRequest,
)
from core.application.validators import (
    raise_if_invalid,
    validate_coupon,
    validate_create_order,
    validate_fee_configuration,
)
from core.domain.enums import DiscountType, FeeCategory, PaymentMethod
from core.domain.exceptions import FieldError, RequestValidationFailed


def fields(errors):
    return {error.field for error in errors}


def address(**overrides) -> AddressDTO:
    data = dict(
        street="Rua Augusta",
        number="1500",
        neighborhood="Consolacao",
        city="Sao Paulo",
        state="SP",
        zip_code="01304-001",
    )
    data.update(overrides)
    return AddressDTO(**data)


def order_request(**overrides) -> CreateOrderRequest:
    data = dict(
        restaurant_id=1,
        payment_method=PaymentMethod.PIX,
        items=[OrderItemRequest(product_id=3, quantity=2)],
    )
    data.update(overrides)
    return CreateOrderRequest(**data)


class TestValidateCreateOrder:

    def test_valid_request(self):
        assert validate_create_order(order_request(delivery_address=address())) == []

    def test_needs_items_or_cart(self):
        errors = validate_create_order(order_request(items=[]))
        assert fields(errors) == {"items"}

    def test_items_and_cart_are_exclusive(self):
        errors = validate_create_order(order_request(cart_id=4))
        assert "items" in fields(errors)

    def test_cart_path_rejects_coupon_code(self):
        errors = validate_create_order(order_request(items=[], cart_id=4, coupon_code="WELCOME10"))
        assert fields(errors) == {"coupon_code"}

    def test_item_fields_are_indexed(self):
        errors = validate_create_order(
            order_request(items=[
                OrderItemRequest(product_id=3, quantity=1),
                OrderItemRequest(product_id=0, quantity=0),
            ])
        )
        assert fields(errors) == {"items[1].product_id", "items[1].quantity"}

    def test_change_for_only_with_cash(self):
        errors = validate_create_order(order_request(change_for=Decimal("100")))
        assert fields(errors) == {"change_for"}

        cash = order_request(payment_method=PaymentMethod.CASH, change_for=Decimal("100"))
        assert validate_create_order(cash) == []

    def test_address_sources_are_exclusive(self):
        errors = validate_create_order(order_request(delivery_address=address(), address_id=9))
        assert fields(errors) == {"address_id"}

    def test_address_fields(self):
        bad = address(street=" ", state="Sao Paulo", zip_code="123", latitude=Decimal("-23.5"))
        errors = validate_create_order(order_request(delivery_address=bad))
        assert fields(errors) == {
            "delivery_address.street",
            "delivery_address.state",
            "delivery_address.zip_code",
            "delivery_address",
        }

    def test_invalid_coupon_code(self):
        errors = validate_create_order(order_request(coupon_code="a!"))
        assert fields(errors) == {"coupon_code"}


class TestValidateCoupon:

    def make(self, **overrides) -> CouponRequest:
        data = dict(
            code="SUMMER15",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("15"),
            start_date=date(2026, 1, 1),
            end_date=date(2026, 1, 31),
            max_uses=50,
        )
        data.update(overrides)
        return CouponRequest(**data)

    def test_valid(self):
        assert validate_coupon(self.make()) == []

    def test_percentage_above_hundred(self):
        assert fields(validate_coupon(self.make(discount_value=Decimal("101")))) == {"discount_value"}

    def test_fixed_amount_may_exceed_hundred(self):
        coupon = self.make(discount_type=DiscountType.FIXED_AMOUNT, discount_value=Decimal("150"))
        assert validate_coupon(coupon) == []

    def test_dates_and_uses(self):
        errors = validate_coupon(self.make(end_date=date(2025, 12, 31), max_uses=0))
        assert fields(errors) == {"end_date", "max_uses"}


class TestValidateFeeConfiguration:

    @pytest.mark.parametrize("percent", ["0", "12.5", "100"])
    def test_valid(self, percent):
        request = FeeConfigurationRequest(category=FeeCategory.RESTAURANT, percent=Decimal(percent))
        assert validate_fee_configuration(request) == []

    @pytest.mark.parametrize("percent", ["-1", "100.01", "10.125"])
    def test_invalid(self, percent):
        request = FeeConfigurationRequest(category=FeeCategory.COURIER, percent=Decimal(percent))
        assert fields(validate_fee_configuration(request)) == {"percent"}


def test_raise_if_invalid_carries_errors():
    errors = [FieldError("items", "provide at least one item or a cart_id")]
    with pytest.raises(RequestValidationFailed) as exc_info:
        raise_if_invalid(errors)
    assert exc_info.value.errors == errors

    raise_if_invalid([])
