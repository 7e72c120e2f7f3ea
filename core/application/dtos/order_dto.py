"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus, PaymentMethod, PaymentStatus
from core.domain.value_objects import Address, EtaSource


class AddressDTO(BaseModel):
    """DTO for a postal address (delivery snapshot)."""

    street: str = Field(..., description="Street name")
    number: str = Field(..., description="Street number")
    neighborhood: str = Field(..., description="Neighborhood")
    city: str = Field(..., description="City")
    state: str = Field(..., description="Two-letter state code")
    zip_code: str = Field(..., description="Postal code")
    complement: Optional[str] = Field(None, description="Apartment, block, ...")
    latitude: Optional[Decimal] = Field(None, description="Latitude (decimal degrees)")
    longitude: Optional[Decimal] = Field(None, description="Longitude (decimal degrees)")

    model_config = {"frozen": True}

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            number=self.number,
            neighborhood=self.neighborhood,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            complement=self.complement,
            latitude=self.latitude,
            longitude=self.longitude,
        )

    @classmethod
    def from_domain(cls, address: Address) -> "AddressDTO":
        return cls(
            street=address.street,
            number=address.number,
            neighborhood=address.neighborhood,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            complement=address.complement,
            latitude=address.latitude,
            longitude=address.longitude,
        )


class OrderItemRequest(BaseModel):
    """Requested product and quantity."""

    product_id: int = Field(..., description="Catalog product id")
    quantity: int = Field(..., description="Quantity ordered")

    model_config = {"frozen": True}


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order from explicit items or from a cart."""

    restaurant_id: int = Field(..., description="Restaurant the order is placed with")
    payment_method: PaymentMethod = Field(..., description="PIX, CREDIT_CARD or CASH")
    items: List[OrderItemRequest] = Field(default_factory=list, description="Explicit items")
    cart_id: Optional[int] = Field(None, description="Cart to convert instead of explicit items")
    coupon_code: Optional[str] = Field(None, description="Coupon for the explicit-items path")
    delivery_address: Optional[AddressDTO] = Field(None, description="Delivery address")
    address_id: Optional[int] = Field(None, description="Saved client address to deliver to")
    change_for: Optional[Decimal] = Field(None, description="Cash amount the client pays with")
    notes: Optional[str] = Field(None, max_length=500, description="Notes for the restaurant")

    model_config = {"frozen": True}


class CancelOrderRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=255, description="Cancellation reason")

    model_config = {"frozen": True}


class RefundRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=255, description="Refund reason")

    model_config = {"frozen": True}


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    product_id: int = Field(..., description="Catalog product id")
    product_name: str = Field(..., description="Product name when ordered")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    unit_price: Decimal = Field(..., ge=0, description="Unit price when ordered")
    subtotal: Decimal = Field(..., ge=0, description="quantity * unit_price")

    model_config = {"frozen": True}


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: int = Field(..., description="Order id")
    status: OrderStatus = Field(..., description="Lifecycle status")
    client_id: int = Field(..., description="Client id")
    restaurant_id: int = Field(..., description="Restaurant id")
    courier_id: Optional[int] = Field(None, description="Assigned courier id")
    coupon_id: Optional[int] = Field(None, description="Redeemed coupon id")
    payment_method: PaymentMethod = Field(..., description="Payment method")
    change_for: Optional[Decimal] = Field(None, description="Cash amount for change")
    notes: Optional[str] = Field(None, description="Notes")
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")
    delivery_address: Optional[AddressDTO] = Field(None, description="Delivery address snapshot")

    subtotal: Decimal = Field(..., description="Sum of item subtotals")
    delivery_fee: Decimal = Field(..., description="Delivery fee")
    discount: Decimal = Field(..., description="Coupon discount")
    total: Decimal = Field(..., description="subtotal - discount + delivery_fee")

    restaurant_platform_fee: Optional[Decimal] = Field(None, description="Set after delivery")
    restaurant_net_value: Optional[Decimal] = Field(None, description="Set after delivery")
    courier_platform_fee: Optional[Decimal] = Field(None, description="Set after delivery")
    courier_net_value: Optional[Decimal] = Field(None, description="Set after delivery")

    estimated_delivery_at: Optional[datetime] = Field(None, description="Expected delivery time")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            status=order.status,
            client_id=order.client_id,
            restaurant_id=order.restaurant_id,
            courier_id=order.courier_id,
            coupon_id=order.coupon_id,
            payment_method=order.payment_method,
            change_for=order.change_for,
            notes=order.notes,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
            delivery_address=(
                AddressDTO.from_domain(order.delivery_address) if order.delivery_address else None
            ),
            subtotal=order.subtotal,
            delivery_fee=order.delivery_fee,
            discount=order.discount,
            total=order.total,
            restaurant_platform_fee=order.restaurant_platform_fee,
            restaurant_net_value=order.restaurant_net_value,
            courier_platform_fee=order.courier_platform_fee,
            courier_net_value=order.courier_net_value,
            estimated_delivery_at=order.estimated_delivery_at,
            created_at=order.created_at,
        )


class RefundDTO(BaseModel):
    order_id: int = Field(..., description="Order id")
    status: PaymentStatus = Field(..., description="Payment status after the refund")
    amount: Decimal = Field(..., description="Refunded amount")
    reason: str = Field(..., description="Refund reason")

    model_config = {"frozen": True}


class RouteDTO(BaseModel):
    """Restaurant-to-customer route for the assigned courier."""

    order_id: int = Field(..., description="Order id")
    distance_km: Optional[Decimal] = Field(None, description="Road distance, when known")
    duration_minutes: Optional[int] = Field(None, description="Travel time, when known")
    waypoints: List[Tuple[float, float]] = Field(
        default_factory=list, description="Decoded (lat, lon) points; empty when unavailable"
    )

    model_config = {"frozen": True}


class TrackingDTO(BaseModel):
    """Live delivery progress: where the courier is and how far is left."""

    order_id: int = Field(..., description="Order id")
    status: OrderStatus = Field(..., description="Current order status")
    courier_id: int = Field(..., description="Assigned courier")
    courier_latitude: Optional[Decimal] = Field(None, description="Courier position, when known")
    courier_longitude: Optional[Decimal] = Field(None, description="Courier position, when known")
    restaurant_latitude: Optional[Decimal] = Field(None, description="Pickup point, when geocoded")
    restaurant_longitude: Optional[Decimal] = Field(None, description="Pickup point, when geocoded")
    destination_latitude: Optional[Decimal] = Field(None, description="Delivery point, when geocoded")
    destination_longitude: Optional[Decimal] = Field(None, description="Delivery point, when geocoded")
    remaining_distance_km: Optional[Decimal] = Field(
        None, description="Courier to destination; null while either position is unknown"
    )
    eta_minutes: Optional[int] = Field(None, description="Minutes to destination")
    eta_source: Optional[EtaSource] = Field(None, description="Which estimate produced the ETA")
    near_destination: bool = Field(False, description="Courier within 100 m of the destination")

    model_config = {"frozen": True}
