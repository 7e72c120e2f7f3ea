"""Courier-facing delivery operations: listing, claiming, routing and tracking orders."""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import OrderDTO, RouteDTO, TrackingDTO
from core.application.interfaces import IRoutingService
from core.application.services.eta_estimator import EtaEstimator
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import Courier, Order
from core.domain.enums import ActorRole, OrderStatus, VehicleType
from core.domain.event_bus import EventBus
from core.domain.events import OrderAvailableForPickupEvent
from core.domain.exceptions import AccessDenied, OrderAlreadyProcessed, ResourceNotFound
from core.domain.services.order_access import OrderParties, ensure_can_track, ensure_role
from core.domain.value_objects import Actor, Address, EtaEstimate

logger = logging.getLogger(__name__)

_FINISHED = (OrderStatus.DELIVERED, OrderStatus.CANCELED)
_NEAR_DESTINATION_KM = Decimal("0.1")


class DeliveryAssignmentService:
    """
    Coordinates couriers and orders.

    Claiming is a single conditional UPDATE so that exactly one of several
    concurrent couriers wins an order. The ETA is computed after the claim
    commits, never while a write transaction is open.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        eta_estimator: EtaEstimator,
        event_bus: EventBus,
        routing_service: Optional[IRoutingService] = None,
    ) -> None:
        self._session_factory = session_factory
        self._eta = eta_estimator
        self._event_bus = event_bus
        self._routing = routing_service

    # =========================================================================
    # LISTINGS
    # =========================================================================

    async def list_available_orders(self, actor: Actor, limit: int = 100) -> List[OrderDTO]:
        """PREPARING orders without a courier, oldest first."""
        uow = create_uow(self._session_factory)
        async with uow:
            courier = await self._approved_courier(uow, actor)
            orders = await uow.orders.find_available(limit=limit)

        await self._event_bus.publish_all(
            [OrderAvailableForPickupEvent(order_id=order.id, courier_id=courier.id) for order in orders]
        )
        return [OrderDTO.from_domain(order) for order in orders]

    async def list_active_deliveries(self, actor: Actor) -> List[OrderDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            courier = await self._approved_courier(uow, actor)
            orders = await uow.orders.find_by_courier(courier.id, exclude_statuses=_FINISHED)
            return [OrderDTO.from_domain(order) for order in orders]

    async def list_delivery_history(self, actor: Actor) -> List[OrderDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            courier = await self._approved_courier(uow, actor)
            orders = await uow.orders.find_by_courier(courier.id, statuses=[OrderStatus.DELIVERED])
            return [OrderDTO.from_domain(order) for order in orders]

    # =========================================================================
    # ASSIGNMENT
    # =========================================================================

    async def accept_order(self, actor: Actor, order_id: int) -> OrderDTO:
        """
        Claim a PREPARING order for the calling courier and set its ETA.

        Raises:
            AccessDenied: caller is not an approved courier
            ResourceNotFound: order does not exist
            OrderAlreadyProcessed: order is not PREPARING or was claimed first
        """
        # 1. Claim
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            courier = await self._approved_courier(uow, actor)

            if not await uow.orders.claim_courier(order_id, courier.id):
                order = await self._get(uow, order_id)
                order.ensure_acceptable()
                # Row changed between the UPDATE and the re-read
                raise OrderAlreadyProcessed("Order was already accepted by another courier")

            order = await self._get(uow, order_id)
            origin = await uow.addresses.find_principal_for_restaurant(order.restaurant_id)
            await uow.commit()
            logger.info(f"[{execution_id}] Order {order_id} accepted by courier {courier.id}")

        order.record_assignment()
        await self._publish(order)

        # 2. ETA, outside any transaction
        estimate = await self._estimate(origin, order.delivery_address, courier.vehicle_type)
        logger.info(
            f"[{execution_id}] Order {order_id} ETA {estimate.eta_minutes} min "
            f"({estimate.source.value}, {estimate.distance_km} km)"
        )

        # 3. Store the expected delivery time
        return await self._store_eta(order_id, estimate, fallback=order)

    async def decline_order(self, actor: Actor, order_id: int) -> None:
        """Record that a courier passed on an order; nothing is persisted."""
        uow = create_uow(self._session_factory)
        async with uow:
            courier = await self._approved_courier(uow, actor)
            await self._get(uow, order_id)
            logger.info(f"[{uow.execution_id}] Courier {courier.id} declined order {order_id}")

    # =========================================================================
    # ROUTE
    # =========================================================================

    async def get_route(self, actor: Actor, order_id: int) -> RouteDTO:
        """
        Restaurant-to-customer route for the assigned courier or an admin.

        Best effort: an unavailable routing service yields an empty route.
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            courier = await uow.couriers.find_by_id(order.courier_id) if order.courier_id else None
            if not actor.is_admin:
                if courier is None or actor.user_id is None or courier.user_id != actor.user_id:
                    raise AccessDenied("Only the assigned courier can view this route")
            origin = await uow.addresses.find_principal_for_restaurant(order.restaurant_id)

        empty = RouteDTO(order_id=order_id)
        destination = order.delivery_address
        if self._routing is None or not _complete(origin) or not _complete(destination):
            return empty

        vehicle = courier.vehicle_type if courier else VehicleType.MOTORCYCLE
        try:
            route = await self._routing.route(
                origin.latitude,
                origin.longitude,
                destination.latitude,
                destination.longitude,
                vehicle.routing_profile,
                with_geometry=True,
            )
        except Exception as e:
            logger.warning(f"Route lookup failed for order {order_id}: {e}", exc_info=True)
            return empty

        if route is None:
            return empty
        return RouteDTO(
            order_id=order_id,
            distance_km=route.distance_km,
            duration_minutes=route.duration_minutes,
            waypoints=route.waypoints,
        )

    # =========================================================================
    # TRACKING
    # =========================================================================

    async def get_tracking(self, actor: Actor, order_id: int) -> TrackingDTO:
        """
        Courier position and the remaining distance and time to the customer.

        Raises:
            ResourceNotFound: order missing or no courier assigned yet
            AccessDenied: caller is neither the client, the courier nor an admin
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            client = await uow.clients.find_by_id(order.client_id)
            courier = await uow.couriers.find_by_id(order.courier_id) if order.courier_id else None
            ensure_can_track(
                actor,
                OrderParties(
                    client_user_id=client.user_id if client else None,
                    restaurant_owner_id=None,
                    courier_user_id=courier.user_id if courier else None,
                ),
            )
            if courier is None:
                raise ResourceNotFound(f"Order {order_id} has no courier assigned")
            origin = await uow.addresses.find_principal_for_restaurant(order.restaurant_id)

        destination = order.delivery_address
        tracking = dict(
            order_id=order_id,
            status=order.status,
            courier_id=courier.id,
            courier_latitude=courier.latitude,
            courier_longitude=courier.longitude,
        )
        if _complete(origin):
            tracking.update(restaurant_latitude=origin.latitude, restaurant_longitude=origin.longitude)
        if _complete(destination):
            tracking.update(
                destination_latitude=destination.latitude,
                destination_longitude=destination.longitude,
            )

        if not _complete(destination) or not courier.has_position:
            logger.info(f"Order {order_id}: courier or destination position unknown, no estimate")
            return TrackingDTO(**tracking)

        estimate = await self._eta.estimate(
            courier.latitude,
            courier.longitude,
            destination.latitude,
            destination.longitude,
            courier.vehicle_type,
        )
        return TrackingDTO(
            **tracking,
            remaining_distance_km=estimate.distance_km,
            eta_minutes=estimate.eta_minutes,
            eta_source=estimate.source,
            near_destination=(
                estimate.distance_km is not None and estimate.distance_km <= _NEAR_DESTINATION_KM
            ),
        )

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @staticmethod
    async def _approved_courier(uow: UnitOfWork, actor: Actor) -> Courier:
        ensure_role(actor, ActorRole.COURIER, "Only couriers can perform this operation")
        courier = await uow.couriers.find_by_user_id(actor.user_id)
        if courier is None:
            raise AccessDenied("No courier profile for the current user")
        if not courier.is_approved:
            raise AccessDenied(f"Courier is {courier.status.value} and cannot take deliveries")
        return courier

    @staticmethod
    async def _get(uow: UnitOfWork, order_id: int) -> Order:
        order = await uow.orders.find_by_id(order_id)
        if order is None:
            raise ResourceNotFound(f"Order {order_id} not found")
        return order

    async def _estimate(
        self,
        origin: Optional[Address],
        destination: Optional[Address],
        vehicle_type: VehicleType,
    ) -> EtaEstimate:
        return await self._eta.estimate(
            origin.latitude if origin else None,
            origin.longitude if origin else None,
            destination.latitude if destination else None,
            destination.longitude if destination else None,
            vehicle_type,
        )

    async def _store_eta(self, order_id: int, estimate: EtaEstimate, fallback: Order) -> OrderDTO:
        expected = datetime.now(timezone.utc) + timedelta(minutes=estimate.eta_minutes)
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            order.set_estimated_delivery(expected)
            try:
                await uow.orders.save(order)
                await uow.commit()
            except OrderAlreadyProcessed:
                # The order moved on concurrently; the ETA is informational
                logger.warning(f"Order {order_id} changed before its ETA could be stored")
                await uow.rollback()
                return OrderDTO.from_domain(fallback)
        return OrderDTO.from_domain(order)

    async def _publish(self, order: Order) -> None:
        events = order.get_domain_events()
        order.clear_domain_events()
        await self._event_bus.publish_all(events)


def _complete(address: Optional[Address]) -> bool:
    return address is not None and address.is_complete()
