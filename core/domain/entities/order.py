"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from ..enums import OrderStatus, PaymentMethod
from ..events.base import DomainEvent
from ..events.order_events import (
    CourierAssignedEvent,
    OrderCreatedEvent,
    OrderSettledEvent,
    OrderStatusChangedEvent,
)
from ..exceptions import InvalidArgument, OrderAlreadyProcessed
from ..services.monetary import ZERO, money
from ..value_objects import Address


@dataclass
class OrderItem:
    """
    Line item within an order.

    The unit price is a snapshot taken when the order was placed; later
    catalog price changes never reach an existing order.
    """
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self):
        if self.quantity <= 0:
            raise InvalidArgument(f"Quantity must be positive, got {self.quantity}")
        self.unit_price = money(self.unit_price)

    @property
    def subtotal(self) -> Decimal:
        return money(self.unit_price * self.quantity)


@dataclass(frozen=True)
class Settlement:
    """Post-delivery platform-fee / net-value split for both sides."""
    restaurant_platform_fee: Decimal
    restaurant_net_value: Decimal
    courier_platform_fee: Decimal
    courier_net_value: Decimal


@dataclass
class Order:
    """
    Order aggregate root.

    Owns its line items and its status. Every transition checks the exact
    source state and raises OrderAlreadyProcessed on mismatch; authorization
    is checked by the application service, which knows who the parties are.
    """
    client_id: int
    restaurant_id: int
    payment_method: PaymentMethod
    items: List[OrderItem] = field(default_factory=list)
    delivery_address: Optional[Address] = None

    status: OrderStatus = OrderStatus.CREATED

    # Monetary fields (2 decimal places)
    subtotal: Decimal = ZERO
    delivery_fee: Decimal = ZERO
    discount: Decimal = ZERO
    total: Decimal = ZERO

    # Populated only after delivery
    restaurant_platform_fee: Optional[Decimal] = None
    restaurant_net_value: Optional[Decimal] = None
    courier_platform_fee: Optional[Decimal] = None
    courier_net_value: Optional[Decimal] = None

    id: Optional[int] = None
    courier_id: Optional[int] = None
    coupon_id: Optional[int] = None
    change_for: Optional[Decimal] = None
    notes: Optional[str] = None
    estimated_delivery_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def place(
        cls,
        client_id: int,
        restaurant_id: int,
        payment_method: PaymentMethod,
        items: List[OrderItem],
        delivery_fee: Decimal,
        discount: Decimal = ZERO,
        coupon_id: Optional[int] = None,
        delivery_address: Optional[Address] = None,
        change_for: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> "Order":
        """
        Build a new order in CREATED status with its totals computed.

        total = subtotal - discount + delivery_fee
        """
        if not items:
            raise InvalidArgument("Order must contain at least one item")

        subtotal = money(sum((item.subtotal for item in items), ZERO))
        discount = money(discount)
        if discount > subtotal:
            raise InvalidArgument(f"Discount {discount} exceeds subtotal {subtotal}")

        delivery_fee = money(delivery_fee)
        return cls(
            client_id=client_id,
            restaurant_id=restaurant_id,
            payment_method=payment_method,
            items=list(items),
            delivery_address=delivery_address,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            discount=discount,
            total=money(subtotal - discount + delivery_fee),
            coupon_id=coupon_id,
            change_for=money(change_for) if change_for is not None else None,
            notes=notes,
        )

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def confirm(self) -> None:
        """CREATED -> CONFIRMED (payment confirmed)."""
        self._require_status(OrderStatus.CREATED, "Order was already processed")
        self._change_status(OrderStatus.CONFIRMED, "Payment confirmed")

    def start_preparing(self) -> None:
        """CONFIRMED -> PREPARING."""
        self._require_status(
            OrderStatus.CONFIRMED,
            "Order must be CONFIRMED to be marked as PREPARING",
        )
        self._change_status(OrderStatus.PREPARING, "Restaurant started preparing")

    def assign_courier(self, courier_id: int) -> None:
        """Bind a courier to a PREPARING order that has none yet."""
        self.ensure_acceptable()
        self.courier_id = courier_id
        self._record_event(CourierAssignedEvent(order_id=self.id, courier_id=courier_id))

    def record_assignment(self) -> None:
        """Record CourierAssignedEvent for a claim already written by the repository."""
        if self.courier_id is None:
            raise InvalidArgument(f"Order {self.id} has no courier")
        self._record_event(CourierAssignedEvent(order_id=self.id, courier_id=self.courier_id))

    def ensure_acceptable(self) -> None:
        """
        Raises:
            OrderAlreadyProcessed: order is not PREPARING or already has a courier
        """
        self._require_status(OrderStatus.PREPARING, "Order must be PREPARING to be accepted")
        if self.courier_id is not None:
            raise OrderAlreadyProcessed("Order was already accepted by another courier")

    def dispatch(self) -> None:
        """PREPARING -> OUT_FOR_DELIVERY."""
        self._require_status(
            OrderStatus.PREPARING,
            "Order must be PREPARING to be marked as OUT_FOR_DELIVERY",
        )
        self._change_status(OrderStatus.OUT_FOR_DELIVERY, "Courier left for delivery")

    def deliver(self) -> None:
        """OUT_FOR_DELIVERY -> DELIVERED."""
        self._require_status(
            OrderStatus.OUT_FOR_DELIVERY,
            "Order must be OUT_FOR_DELIVERY to be marked as DELIVERED",
        )
        self._change_status(OrderStatus.DELIVERED, "Order delivered")

    def cancel(self, reason: Optional[str] = None) -> None:
        """Any non-terminal status -> CANCELED."""
        self.ensure_cancelable()
        self._change_status(OrderStatus.CANCELED, reason or "Order canceled")

    def ensure_cancelable(self) -> None:
        if self.status.is_terminal:
            raise OrderAlreadyProcessed(
                f"Order is already {self.status.value} and cannot be canceled"
            )

    # =========================================================================
    # SETTLEMENT / DELIVERY DATA
    # =========================================================================

    def apply_settlement(self, settlement: Settlement) -> None:
        """
        Store the post-delivery split.

        Raises:
            OrderAlreadyProcessed: order is not DELIVERED or was already settled
        """
        self._require_status(OrderStatus.DELIVERED, "Only DELIVERED orders can be settled")
        if self.is_settled:
            raise OrderAlreadyProcessed(f"Order {self.id} was already settled")

        self.restaurant_platform_fee = settlement.restaurant_platform_fee
        self.restaurant_net_value = settlement.restaurant_net_value
        self.courier_platform_fee = settlement.courier_platform_fee
        self.courier_net_value = settlement.courier_net_value

        self._record_event(
            OrderSettledEvent(
                order_id=self.id,
                restaurant_platform_fee=settlement.restaurant_platform_fee,
                restaurant_net_value=settlement.restaurant_net_value,
                courier_platform_fee=settlement.courier_platform_fee,
                courier_net_value=settlement.courier_net_value,
            )
        )

    @property
    def is_settled(self) -> bool:
        return self.restaurant_net_value is not None or self.courier_net_value is not None

    def set_estimated_delivery(self, when: datetime) -> None:
        self.estimated_delivery_at = when

    # =========================================================================
    # EVENTS
    # =========================================================================

    def record_creation(self) -> None:
        """Record OrderCreatedEvent once the order has an identity."""
        if any(isinstance(e, OrderCreatedEvent) for e in self._domain_events):
            return
        self._record_event(
            OrderCreatedEvent(
                order_id=self.id,
                client_id=self.client_id,
                restaurant_id=self.restaurant_id,
                total=self.total,
            )
        )

    def get_domain_events(self) -> List[DomainEvent]:
        """Events recorded since the last clear."""
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def _record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require_status(self, expected: OrderStatus, message: str) -> None:
        if self.status != expected:
            raise OrderAlreadyProcessed(f"{message} (current status: {self.status.value})")

    def _change_status(self, new_status: OrderStatus, reason: str) -> None:
        previous = self.status
        self.status = new_status
        self._record_event(
            OrderStatusChangedEvent(
                order_id=self.id,
                previous_status=previous.value,
                new_status=new_status.value,
                reason=reason,
            )
        )
