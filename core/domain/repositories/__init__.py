"""Domain repository interfaces."""
from .cart_repository import CartRepository
from .coupon_repository import CouponRepository
from .courier_repository import CourierRepository
from .fee_configuration_repository import FeeConfigurationRepository
from .order_repository import OrderRepository
from .party_repository import AddressRepository, ClientRepository, RestaurantRepository
from .product_repository import ProductRepository

__all__ = [
    "AddressRepository",
    "CartRepository",
    "ClientRepository",
    "CouponRepository",
    "CourierRepository",
    "FeeConfigurationRepository",
    "OrderRepository",
    "ProductRepository",
    "RestaurantRepository",
]
