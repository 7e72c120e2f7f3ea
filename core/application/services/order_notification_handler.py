"""Event subscriber turning order events into outbound notifications."""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import INotificationService
from core.data.uow import create_uow
from core.domain.enums import OrderStatus
from core.domain.events import (
    CourierAssignedEvent,
    DomainEvent,
    OrderAvailableForPickupEvent,
    OrderStatusChangedEvent,
)

logger = logging.getLogger(__name__)

_RESTAURANT_STATUSES = (OrderStatus.CONFIRMED.value, OrderStatus.DELIVERED.value)
COURIER_ASSIGNED = "COURIER_ASSIGNED"


class OrderNotificationHandler:
    """
    Subscribe an instance to the event bus:

        bus.subscribe(OrderNotificationHandler(session_factory, notifications))

    Contact details are read in a short read-only unit of work per event.
    Events without a matching rule are ignored.
    """

    def __init__(self, session_factory: async_sessionmaker, notifications: INotificationService) -> None:
        self._session_factory = session_factory
        self._notifications = notifications

    async def __call__(self, event: DomainEvent) -> None:
        if isinstance(event, OrderStatusChangedEvent):
            await self._on_status_changed(event)
        elif isinstance(event, CourierAssignedEvent):
            await self._on_courier_assigned(event)
        elif isinstance(event, OrderAvailableForPickupEvent):
            await self._on_available(event)

    async def _on_status_changed(self, event: OrderStatusChangedEvent) -> None:
        order, client, restaurant = await self._load(event.order_id)
        if order is None:
            return

        await self._notifications.notify_order_status_change(
            order.id,
            client.email if client else None,
            client.phone if client else None,
            event.new_status,
        )
        if event.new_status in _RESTAURANT_STATUSES:
            await self._notifications.notify_restaurant_new_order(
                order.id, restaurant.email if restaurant else None, order.total
            )

    async def _on_courier_assigned(self, event: CourierAssignedEvent) -> None:
        order, client, restaurant = await self._load(event.order_id)
        if order is None:
            return

        await self._notifications.notify_restaurant_new_order(
            order.id, restaurant.email if restaurant else None, order.total
        )
        await self._notifications.notify_order_status_change(
            order.id,
            client.email if client else None,
            client.phone if client else None,
            COURIER_ASSIGNED,
        )

    async def _on_available(self, event: OrderAvailableForPickupEvent) -> None:
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(event.order_id)
            courier = await uow.couriers.find_by_id(event.courier_id) if event.courier_id else None
        if order is None or courier is None:
            logger.debug(f"Skipping pickup notification for order {event.order_id}")
            return

        address = order.delivery_address.to_geocoding_string() if order.delivery_address else ""
        await self._notifications.notify_new_order_available(
            order.id, courier.email, courier.phone, address, order.total
        )

    async def _load(self, order_id):
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)
            if order is None:
                logger.warning(f"Order {order_id} vanished before its notification was sent")
                return None, None, None
            client = await uow.clients.find_by_id(order.client_id)
            restaurant = await uow.restaurants.find_by_id(order.restaurant_id)
            return order, client, restaurant
