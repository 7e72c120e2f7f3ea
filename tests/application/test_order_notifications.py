"""OrderNotificationHandler subscribed to the event bus."""

from decimal import Decimal

import pytest

from core.application.services import OrderNotificationHandler
from core.application.services.order_notification_handler import COURIER_ASSIGNED
from core.domain.events import OrderStatusChangedEvent


@pytest.fixture
def notified(session_factory, notifications, bus):
    bus.subscribe(OrderNotificationHandler(session_factory, notifications))
    return notifications


@pytest.mark.asyncio
async def test_client_hears_every_status(notified, prepared_order, assignment, lifecycle, bus, actors):
    order_id = await prepared_order()
    await assignment.accept_order(actors.courier, order_id)
    await lifecycle.mark_out_for_delivery(actors.courier, order_id)
    await lifecycle.mark_delivered(actors.courier, order_id)
    await bus.drain()

    statuses = [n["status"] for n in notified.get_notifications("order_status")]
    assert sorted(statuses) == sorted(
        ["CONFIRMED", "PREPARING", COURIER_ASSIGNED, "OUT_FOR_DELIVERY", "DELIVERED"]
    )
    assert {n["email"] for n in notified.get_notifications("order_status")} == {"ana@example.com"}
    assert {n["phone"] for n in notified.get_notifications("order_status")} == {"+5511999990001"}


@pytest.mark.asyncio
async def test_restaurant_hears_confirmation_assignment_and_delivery(
    notified, prepared_order, assignment, lifecycle, bus, actors
):
    order_id = await prepared_order()
    await bus.drain()
    assert len(notified.get_notifications("restaurant_order")) == 1

    await assignment.accept_order(actors.courier, order_id)
    await lifecycle.mark_out_for_delivery(actors.courier, order_id)
    await lifecycle.mark_delivered(actors.courier, order_id)
    await bus.drain()

    restaurant = notified.get_notifications("restaurant_order")
    assert len(restaurant) == 3
    assert {n["email"] for n in restaurant} == {"burger@example.com"}
    assert {n["total"] for n in restaurant} == {Decimal("50.00")}


@pytest.mark.asyncio
async def test_cancellation_reaches_client_only(notified, place_order, lifecycle, bus, actors):
    order = await place_order()
    await lifecycle.cancel_order(actors.client, order.id, "Too slow")
    await bus.drain()

    assert [n["status"] for n in notified.get_notifications("order_status")] == ["CANCELED"]
    assert notified.get_notifications("restaurant_order") == []


@pytest.mark.asyncio
async def test_courier_hears_available_order(notified, prepared_order, assignment, bus, actors):
    order_id = await prepared_order()
    await assignment.list_available_orders(actors.courier)
    await bus.drain()

    available = notified.get_notifications("order_available")
    assert [(n["order_id"], n["email"]) for n in available] == [(order_id, "carlos@example.com")]
    assert available[0]["address"].startswith("Rua Augusta, 1500")


@pytest.mark.asyncio
async def test_unknown_order_is_skipped(notified, bus):
    await bus.publish(OrderStatusChangedEvent(order_id=404, previous_status="CREATED", new_status="CONFIRMED"))
    await bus.drain()

    assert notified.get_notifications() == []
