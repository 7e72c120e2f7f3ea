"""Domain layer - pure domain models and interfaces."""

from .entities import Coupon, Courier, Order, OrderItem
from .enums import OrderStatus
from .exceptions import DomainError
from .value_objects import Actor, Address, ExecutionID

__all__ = [
    "Actor",
    "Address",
    "Coupon",
    "Courier",
    "DomainError",
    "ExecutionID",
    "Order",
    "OrderItem",
    "OrderStatus",
]
