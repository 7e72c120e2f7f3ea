"""Courier listings, order claims, ETA and routes through DeliveryAssignmentService."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import update

from core.application.interfaces import IRoutingService, RouteResult
from core.application.services import DeliveryAssignmentService, EtaEstimator
from core.data.models import CourierModel
from core.domain.enums import OrderStatus
from core.domain.events import CourierAssignedEvent, OrderAvailableForPickupEvent
from core.domain.exceptions import AccessDenied, OrderAlreadyProcessed, ResourceNotFound
from core.domain.value_objects import EtaSource


class StaticRoutingService(IRoutingService):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def route(self, origin_lat, origin_lon, dest_lat, dest_lon, profile, with_geometry=False):
        self.calls.append((profile, with_geometry))
        if self.error:
            raise self.error
        return self.result


def routed_assignment(session_factory, bus, delivery_settings, routing):
    return DeliveryAssignmentService(
        session_factory, EtaEstimator(routing, delivery_settings), bus, routing_service=routing
    )


class TestListings:

    @pytest.mark.asyncio
    async def test_available_orders_are_preparing_and_unassigned(
        self, place_order, prepared_order, assignment, actors
    ):
        created = await place_order()
        waiting = await prepared_order()
        taken = await prepared_order()
        await assignment.accept_order(actors.bike_courier, taken)

        available = await assignment.list_available_orders(actors.courier)

        assert [o.id for o in available] == [waiting]
        assert created.id not in {o.id for o in available}

    @pytest.mark.asyncio
    async def test_listing_announces_orders_to_the_courier(self, prepared_order, assignment, actors, bus):
        received = []
        bus.subscribe(received.append)
        order_id = await prepared_order()

        await assignment.list_available_orders(actors.courier)
        await bus.drain()

        pickups = [e for e in received if isinstance(e, OrderAvailableForPickupEvent)]
        assert [(e.order_id, e.courier_id) for e in pickups] == [(order_id, 1)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("who", ["pending_courier", "client", "admin"])
    async def test_only_approved_couriers(self, assignment, actors, who):
        with pytest.raises(AccessDenied):
            await assignment.list_available_orders(getattr(actors, who))

    @pytest.mark.asyncio
    async def test_active_and_history(self, prepared_order, assignment, lifecycle, actors):
        active_id = await prepared_order()
        done_id = await prepared_order()
        for order_id in (active_id, done_id):
            await assignment.accept_order(actors.courier, order_id)
        await lifecycle.mark_out_for_delivery(actors.courier, done_id)
        await lifecycle.mark_delivered(actors.courier, done_id)

        active = await assignment.list_active_deliveries(actors.courier)
        history = await assignment.list_delivery_history(actors.courier)

        assert [o.id for o in active] == [active_id]
        assert [o.id for o in history] == [done_id]
        assert await assignment.list_active_deliveries(actors.bike_courier) == []


class TestAcceptOrder:

    @pytest.mark.asyncio
    async def test_accept_assigns_courier_and_eta(self, prepared_order, assignment, actors, bus):
        received = []
        bus.subscribe(received.append)
        order_id = await prepared_order()
        before = datetime.now(timezone.utc)

        order = await assignment.accept_order(actors.courier, order_id)
        await bus.drain()

        assert order.courier_id == 1
        assert order.status == OrderStatus.PREPARING
        # About 2.6 km by motorcycle
        assert before + timedelta(minutes=4) < order.estimated_delivery_at < before + timedelta(minutes=8)
        assigned = [e for e in received if isinstance(e, CourierAssignedEvent)]
        assert [(e.order_id, e.courier_id) for e in assigned] == [(order_id, 1)]

    @pytest.mark.asyncio
    async def test_stored_timestamps_are_utc(self, prepared_order, assignment, lifecycle, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)

        stored = await lifecycle.get_order(actors.admin, order_id)

        assert stored.created_at.utcoffset() == timedelta(0)
        assert stored.estimated_delivery_at.utcoffset() == timedelta(0)
        assert stored.created_at <= datetime.now(timezone.utc) < stored.estimated_delivery_at

    @pytest.mark.asyncio
    async def test_eta_defaults_without_coordinates(self, prepared_order, assignment, actors):
        order_id = await prepared_order(actor=actors.other_client)
        before = datetime.now(timezone.utc)

        order = await assignment.accept_order(actors.courier, order_id)

        expected = before + timedelta(minutes=30)
        assert expected - timedelta(seconds=5) < order.estimated_delivery_at < expected + timedelta(minutes=1)

    @pytest.mark.asyncio
    async def test_eta_prefers_routing_service(
        self, prepared_order, session_factory, bus, delivery_settings, actors
    ):
        routing = StaticRoutingService(RouteResult(distance_km=Decimal("4.20"), duration_minutes=17))
        service = routed_assignment(session_factory, bus, delivery_settings, routing)
        order_id = await prepared_order()
        before = datetime.now(timezone.utc)

        order = await service.accept_order(actors.bike_courier, order_id)

        assert routing.calls == [("cycling", False)]
        assert before + timedelta(minutes=16) < order.estimated_delivery_at < before + timedelta(minutes=18)

    @pytest.mark.asyncio
    async def test_second_claim_is_rejected(self, prepared_order, assignment, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)

        with pytest.raises(OrderAlreadyProcessed):
            await assignment.accept_order(actors.bike_courier, order_id)

    @pytest.mark.asyncio
    async def test_order_must_be_preparing(self, place_order, assignment, lifecycle, actors):
        order = await place_order()
        await lifecycle.confirm_order(actors.system, order.id)

        with pytest.raises(OrderAlreadyProcessed):
            await assignment.accept_order(actors.courier, order.id)

    @pytest.mark.asyncio
    async def test_unknown_order(self, assignment, actors):
        with pytest.raises(ResourceNotFound):
            await assignment.accept_order(actors.courier, 404)

    @pytest.mark.asyncio
    async def test_pending_courier_cannot_accept(self, prepared_order, assignment, actors):
        order_id = await prepared_order()
        with pytest.raises(AccessDenied):
            await assignment.accept_order(actors.pending_courier, order_id)

    @pytest.mark.asyncio
    async def test_decline(self, prepared_order, assignment, actors):
        order_id = await prepared_order()

        await assignment.decline_order(actors.courier, order_id)
        with pytest.raises(ResourceNotFound):
            await assignment.decline_order(actors.courier, 404)

        available = await assignment.list_available_orders(actors.courier)
        assert [o.id for o in available] == [order_id]


class TestRoute:

    @pytest.mark.asyncio
    async def test_route_with_waypoints(
        self, prepared_order, session_factory, bus, delivery_settings, actors
    ):
        routing = StaticRoutingService(
            RouteResult(
                distance_km=Decimal("3.10"),
                duration_minutes=9,
                waypoints=[(-23.5505, -46.6333), (-23.5560, -46.6450), (-23.5614, -46.6559)],
            )
        )
        service = routed_assignment(session_factory, bus, delivery_settings, routing)
        order_id = await prepared_order()
        await service.accept_order(actors.courier, order_id)

        route = await service.get_route(actors.courier, order_id)

        assert route.distance_km == Decimal("3.10")
        assert route.duration_minutes == 9
        assert len(route.waypoints) == 3
        assert routing.calls[-1] == ("driving", True)

    @pytest.mark.asyncio
    async def test_routing_failure_yields_empty_route(
        self, prepared_order, session_factory, bus, delivery_settings, actors
    ):
        routing = StaticRoutingService(error=ConnectionError("routing down"))
        service = routed_assignment(session_factory, bus, delivery_settings, routing)
        order_id = await prepared_order()
        await service.accept_order(actors.courier, order_id)

        route = await service.get_route(actors.admin, order_id)

        assert route.order_id == order_id
        assert route.distance_km is None
        assert route.waypoints == []

    @pytest.mark.asyncio
    async def test_without_routing_service(self, prepared_order, assignment, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)

        route = await assignment.get_route(actors.courier, order_id)
        assert route.waypoints == []

    @pytest.mark.asyncio
    async def test_route_is_private_to_assigned_courier(self, prepared_order, assignment, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)

        for outsider in (actors.bike_courier, actors.client):
            with pytest.raises(AccessDenied):
                await assignment.get_route(outsider, order_id)


class TestTracking:

    async def move_courier(self, session_factory, courier_id, latitude, longitude):
        async with session_factory() as session:
            await session.execute(
                update(CourierModel)
                .where(CourierModel.id == courier_id)
                .values(latitude=Decimal(latitude), longitude=Decimal(longitude))
            )
            await session.commit()

    @pytest.mark.asyncio
    async def test_positions_known_before_dispatch(self, prepared_order, assignment, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)

        tracking = await assignment.get_tracking(actors.client, order_id)

        assert tracking.status == OrderStatus.PREPARING
        assert tracking.courier_id == 1
        assert (tracking.restaurant_latitude, tracking.restaurant_longitude) == (
            Decimal("-23.5505"), Decimal("-46.6333")
        )
        assert (tracking.destination_latitude, tracking.destination_longitude) == (
            Decimal("-23.5614"), Decimal("-46.6559")
        )
        # Courier has not been placed yet
        assert tracking.courier_latitude is None
        assert tracking.remaining_distance_km is None
        assert tracking.eta_minutes is None
        assert tracking.near_destination is False

    @pytest.mark.asyncio
    async def test_remaining_distance_from_courier_position(self, prepared_order, assignment, lifecycle, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)
        await lifecycle.mark_out_for_delivery(actors.courier, order_id)

        tracking = await assignment.get_tracking(actors.courier, order_id)

        # Dispatch placed the courier at the restaurant
        assert (tracking.courier_latitude, tracking.courier_longitude) == (
            Decimal("-23.5505"), Decimal("-46.6333")
        )
        assert Decimal("2.5") < tracking.remaining_distance_km < Decimal("2.7")
        assert tracking.eta_minutes == 6
        assert tracking.eta_source == EtaSource.GREAT_CIRCLE
        assert tracking.near_destination is False

    @pytest.mark.asyncio
    async def test_near_destination(self, prepared_order, assignment, lifecycle, session_factory, actors):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)
        await lifecycle.mark_out_for_delivery(actors.courier, order_id)
        await self.move_courier(session_factory, 1, "-23.5610", "-46.6559")

        tracking = await assignment.get_tracking(actors.admin, order_id)

        assert tracking.remaining_distance_km == Decimal("0.1")
        assert tracking.eta_minutes == 1
        assert tracking.near_destination is True

    @pytest.mark.asyncio
    async def test_uses_routing_service_when_available(
        self, prepared_order, lifecycle, session_factory, bus, delivery_settings, actors
    ):
        routing = StaticRoutingService(RouteResult(distance_km=Decimal("3.10"), duration_minutes=9))
        service = routed_assignment(session_factory, bus, delivery_settings, routing)
        order_id = await prepared_order()
        await service.accept_order(actors.courier, order_id)
        await lifecycle.mark_out_for_delivery(actors.courier, order_id)

        tracking = await service.get_tracking(actors.client, order_id)

        assert (tracking.remaining_distance_km, tracking.eta_minutes) == (Decimal("3.10"), 9)
        assert tracking.eta_source == EtaSource.ROUTING_SERVICE

    @pytest.mark.asyncio
    async def test_no_courier_assigned(self, prepared_order, assignment, actors):
        order_id = await prepared_order()

        with pytest.raises(ResourceNotFound):
            await assignment.get_tracking(actors.client, order_id)
        with pytest.raises(ResourceNotFound):
            await assignment.get_tracking(actors.admin, 999)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("who", ["other_client", "bike_courier", "restaurant"])
    async def test_only_client_courier_or_admin(self, prepared_order, assignment, actors, who):
        order_id = await prepared_order()
        await assignment.accept_order(actors.courier, order_id)

        with pytest.raises(AccessDenied):
            await assignment.get_tracking(getattr(actors, who), order_id)
