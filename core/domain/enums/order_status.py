"""
Order Status Enum.

Closed set of lifecycle states for an order.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    CREATED = "CREATED"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELED)
