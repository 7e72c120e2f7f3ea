"""Domain entities."""
from .cart import Cart, CartItem
from .coupon import Coupon
from .courier import Courier
from .fee_configuration import FeeConfiguration
from .order import Order, OrderItem, Settlement
from .party import Client, Restaurant
from .product import Product

__all__ = [
    "Cart",
    "CartItem",
    "Client",
    "Coupon",
    "Courier",
    "FeeConfiguration",
    "Order",
    "OrderItem",
    "Product",
    "Restaurant",
    "Settlement",
]
