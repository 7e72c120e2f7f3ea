"""
Order Domain Events.

Events recorded by the Order aggregate across its lifecycle.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .base import DomainEvent


@dataclass
class _OrderEvent(DomainEvent):
    order_id: Optional[int] = None

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id is not None:
            object.__setattr__(self, "aggregate_id", str(self.order_id))
        super().__post_init__()

    def _get_aggregate_type(self) -> str:
        return "Order"


@dataclass
class OrderCreatedEvent(_OrderEvent):
    """
    Order was placed by a client.

    Consumers: restaurant notification.
    """

    client_id: Optional[int] = None
    restaurant_id: Optional[int] = None
    total: Decimal = Decimal("0.00")


@dataclass
class OrderStatusChangedEvent(_OrderEvent):
    """
    Order status changed.

    Tracks every lifecycle transition (CREATED -> CONFIRMED -> ...).
    """

    previous_status: str = ""
    new_status: str = ""
    reason: Optional[str] = None


@dataclass
class CourierAssignedEvent(_OrderEvent):
    """A courier won the self-assignment race for an order."""

    courier_id: Optional[int] = None


@dataclass
class OrderSettledEvent(_OrderEvent):
    """Platform fees and net payouts were computed after delivery."""

    restaurant_platform_fee: Decimal = Decimal("0.00")
    restaurant_net_value: Decimal = Decimal("0.00")
    courier_platform_fee: Decimal = Decimal("0.00")
    courier_net_value: Decimal = Decimal("0.00")


@dataclass
class OrderAvailableForPickupEvent(_OrderEvent):
    """An unassigned PREPARING order was shown to an approved courier."""

    courier_id: Optional[int] = None
