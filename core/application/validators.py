"""
Request validators.

Each validator returns a list of FieldError; an empty list means the request
may proceed. Services call raise_if_invalid() before touching the domain.
"""
import re
from decimal import Decimal
from typing import List, Optional

from core.application.dtos import (
    AddressDTO,
    CouponRequest,
    CreateOrderRequest,
    FeeConfigurationRequest,
)
from core.domain.enums import DiscountType, PaymentMethod
from core.domain.exceptions import FieldError, RequestValidationFailed

COUPON_CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{3,50}$")
STATE_PATTERN = re.compile(r"^[A-Za-z]{2}$")
ZIP_CODE_PATTERN = re.compile(r"^\d{5}-?\d{3}$")

HUNDRED = Decimal("100")


def raise_if_invalid(errors: List[FieldError]) -> None:
    if errors:
        raise RequestValidationFailed(errors)


def validate_positive_id(value: Optional[int], field: str) -> List[FieldError]:
    if value is None or value <= 0:
        return [FieldError(field, "must be a positive integer")]
    return []


def validate_quantity(quantity: Optional[int], field: str = "quantity") -> List[FieldError]:
    if quantity is None or quantity <= 0:
        return [FieldError(field, "must be greater than zero")]
    return []


def validate_coupon_code(code: Optional[str], field: str = "code") -> List[FieldError]:
    if code is None or not COUPON_CODE_PATTERN.match(code.strip()):
        return [FieldError(field, "must be 3 to 50 letters, digits, '-' or '_'")]
    return []


def validate_address(address: AddressDTO, prefix: str = "delivery_address") -> List[FieldError]:
    errors = []
    for name in ("street", "number", "neighborhood", "city"):
        if not getattr(address, name).strip():
            errors.append(FieldError(f"{prefix}.{name}", "is required"))
    if not STATE_PATTERN.match(address.state):
        errors.append(FieldError(f"{prefix}.state", "must be a two-letter state code"))
    if not ZIP_CODE_PATTERN.match(address.zip_code):
        errors.append(FieldError(f"{prefix}.zip_code", "must have 8 digits (12345-678)"))
    if (address.latitude is None) != (address.longitude is None):
        errors.append(FieldError(prefix, "latitude and longitude must be given together"))
    if address.latitude is not None and not Decimal("-90") <= address.latitude <= Decimal("90"):
        errors.append(FieldError(f"{prefix}.latitude", "must be between -90 and 90"))
    if address.longitude is not None and not Decimal("-180") <= address.longitude <= Decimal("180"):
        errors.append(FieldError(f"{prefix}.longitude", "must be between -180 and 180"))
    return errors


def validate_create_order(request: CreateOrderRequest) -> List[FieldError]:
    errors = validate_positive_id(request.restaurant_id, "restaurant_id")

    if request.cart_id is None and not request.items:
        errors.append(FieldError("items", "provide at least one item or a cart_id"))
    if request.cart_id is not None and request.items:
        errors.append(FieldError("items", "items and cart_id are mutually exclusive"))
    if request.cart_id is not None:
        errors.extend(validate_positive_id(request.cart_id, "cart_id"))
        if request.coupon_code is not None:
            errors.append(FieldError("coupon_code", "attach the coupon to the cart instead"))

    for index, item in enumerate(request.items):
        errors.extend(validate_positive_id(item.product_id, f"items[{index}].product_id"))
        errors.extend(validate_quantity(item.quantity, f"items[{index}].quantity"))

    if request.coupon_code is not None:
        errors.extend(validate_coupon_code(request.coupon_code, "coupon_code"))

    if request.change_for is not None:
        if request.payment_method != PaymentMethod.CASH:
            errors.append(FieldError("change_for", "only allowed for CASH payments"))
        elif request.change_for <= 0:
            errors.append(FieldError("change_for", "must be greater than zero"))

    if request.delivery_address is not None and request.address_id is not None:
        errors.append(FieldError("address_id", "delivery_address and address_id are mutually exclusive"))
    if request.delivery_address is not None:
        errors.extend(validate_address(request.delivery_address))
    if request.address_id is not None:
        errors.extend(validate_positive_id(request.address_id, "address_id"))

    return errors


def validate_coupon(request: CouponRequest) -> List[FieldError]:
    errors = validate_coupon_code(request.code)

    if request.discount_value <= 0:
        errors.append(FieldError("discount_value", "must be greater than zero"))
    elif request.discount_type == DiscountType.PERCENTAGE and request.discount_value > HUNDRED:
        errors.append(FieldError("discount_value", "percentage cannot exceed 100"))

    if request.minimum_order_value < 0:
        errors.append(FieldError("minimum_order_value", "cannot be negative"))
    if request.end_date < request.start_date:
        errors.append(FieldError("end_date", "must not be before start_date"))
    if request.max_uses < 1:
        errors.append(FieldError("max_uses", "must be at least 1"))

    return errors


def validate_fee_configuration(request: FeeConfigurationRequest) -> List[FieldError]:
    if request.percent < 0 or request.percent > HUNDRED:
        return [FieldError("percent", "must be between 0 and 100")]
    if request.percent.as_tuple().exponent < -2:
        return [FieldError("percent", "at most 2 decimal places")]
    return []
