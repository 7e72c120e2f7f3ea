"""Application DTOs."""

from .cart_dto import (
    ApplyCouponRequest,
    CartDTO,
    CartItemDTO,
    CartItemRequest,
    UpdateCartItemRequest,
)
from .coupon_dto import CouponCheckDTO, CouponDTO, CouponRequest
from .fee_configuration_dto import FeeConfigurationDTO, FeeConfigurationRequest
from .order_dto import (
    AddressDTO,
    CancelOrderRequest,
    CreateOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderItemRequest,
    RefundDTO,
    RefundRequest,
    RouteDTO,
    TrackingDTO,
)

__all__ = [
    "AddressDTO",
    "ApplyCouponRequest",
    "CancelOrderRequest",
    "CartDTO",
    "CartItemDTO",
    "CartItemRequest",
    "CouponCheckDTO",
    "CouponDTO",
    "CouponRequest",
    "CreateOrderRequest",
    "FeeConfigurationDTO",
    "FeeConfigurationRequest",
    "OrderDTO",
    "OrderItemDTO",
    "OrderItemRequest",
    "RefundDTO",
    "RefundRequest",
    "RouteDTO",
    "TrackingDTO",
    "UpdateCartItemRequest",
]
