"""SQLAlchemy repository implementations."""

from .cart_repository_impl import SqlAlchemyCartRepository
from .coupon_repository_impl import SqlAlchemyCouponRepository
from .courier_repository_impl import SqlAlchemyCourierRepository
from .fee_configuration_repository_impl import SqlAlchemyFeeConfigurationRepository
from .order_repository_impl import SqlAlchemyOrderRepository
from .party_repository_impl import (
    SqlAlchemyAddressRepository,
    SqlAlchemyClientRepository,
    SqlAlchemyRestaurantRepository,
)
from .product_repository_impl import SqlAlchemyProductRepository

__all__ = [
    "SqlAlchemyAddressRepository",
    "SqlAlchemyCartRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemyCouponRepository",
    "SqlAlchemyCourierRepository",
    "SqlAlchemyFeeConfigurationRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyRestaurantRepository",
]
