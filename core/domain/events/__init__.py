"""Domain events."""
from .base import DomainEvent
from .order_events import (
    CourierAssignedEvent,
    OrderAvailableForPickupEvent,
    OrderCreatedEvent,
    OrderSettledEvent,
    OrderStatusChangedEvent,
)

__all__ = [
    "DomainEvent",
    "CourierAssignedEvent",
    "OrderAvailableForPickupEvent",
    "OrderCreatedEvent",
    "OrderSettledEvent",
    "OrderStatusChangedEvent",
]
