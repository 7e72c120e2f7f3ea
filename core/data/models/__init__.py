"""Database models."""

from .base import Base
from .cart_model import CartItemModel, CartModel
from .catalog_model import ProductModel
from .coupon_model import CouponModel
from .courier_model import CourierModel
from .fee_configuration_model import FeeConfigurationModel
from .order_model import OrderItemModel, OrderModel
from .party_model import AddressModel, ClientModel, RestaurantModel

__all__ = [
    "AddressModel",
    "Base",
    "CartItemModel",
    "CartModel",
    "ClientModel",
    "CouponModel",
    "CourierModel",
    "FeeConfigurationModel",
    "OrderItemModel",
    "OrderModel",
    "ProductModel",
    "RestaurantModel",
]
