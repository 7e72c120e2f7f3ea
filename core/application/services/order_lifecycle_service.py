"""Application service driving orders through their lifecycle."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import CreateOrderRequest, OrderDTO, RefundDTO
from core.application.interfaces import ICourierPositionTracker, IGeocodingService
from core.application.services.settlement_service import SettlementService
from core.application.validators import raise_if_invalid, validate_create_order
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import Client, Order
from core.domain.enums import ActorRole
from core.domain.event_bus import EventBus
from core.domain.exceptions import (
    AccessDenied,
    InvalidArgument,
    OrderAlreadyProcessed,
    ResourceNotFound,
)
from core.domain.services.order_access import (
    OrderParties,
    ensure_admin,
    ensure_assigned_courier,
    ensure_can_cancel,
    ensure_can_confirm,
    ensure_can_view,
    ensure_restaurant_owner,
    ensure_role,
)
from core.domain.value_objects import Actor, Address

logger = logging.getLogger(__name__)


class OrderLifecycleService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Order creation (pricing, coupon redemption, address snapshot)
    - Status transitions with actor authorization
    - Settlement on delivery, refund check on cancel
    - Publishing aggregate events after commit

    Every transition checks the source status before the actor, so a wrong
    status is reported as OrderAlreadyProcessed even to an unauthorized actor.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        settlement: SettlementService,
        event_bus: EventBus,
        position_tracker: ICourierPositionTracker,
        geocoder: Optional[IGeocodingService] = None,
    ) -> None:
        """Initialize order lifecycle service.

        Args:
            session_factory: SQLAlchemy async session factory
            settlement: Pricing, settlement and refunds
            event_bus: Receives aggregate events after commit
            position_tracker: Seeds courier positions on dispatch
            geocoder: Resolves delivery addresses without coordinates
        """
        self._session_factory = session_factory
        self._settlement = settlement
        self._event_bus = event_bus
        self._position_tracker = position_tracker
        self._geocoder = geocoder

    # =========================================================================
    # CREATION
    # =========================================================================

    async def create_order(self, actor: Actor, request: CreateOrderRequest) -> OrderDTO:
        """Create a new order from explicit items or from the client's cart.

        Args:
            actor: Client placing the order
            request: CreateOrderRequest DTO

        Returns:
            OrderDTO with created order details
        """
        ensure_role(actor, ActorRole.CLIENT, "Only clients can place orders")
        raise_if_invalid(validate_create_order(request))

        # 1. Resolve client, restaurant and delivery address (read-only)
        uow = create_uow(self._session_factory)
        async with uow:
            client = await self._client_for(uow, actor)
            if await uow.restaurants.find_by_id(request.restaurant_id) is None:
                raise ResourceNotFound(f"Restaurant {request.restaurant_id} not found")
            address = await self._delivery_address(uow, client, request)

        # 2. Geocode outside any transaction
        geocoded = False
        if not address.is_complete():
            address, geocoded = await self._geocode(address)

        # 3. Price, persist and redeem atomically
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            logger.info(f"[{execution_id}] Creating order for client {client.id}")

            cart = None
            if request.cart_id is not None:
                pricing, cart = await self._settlement.price_cart(
                    uow, client.id, request.cart_id, request.restaurant_id
                )
                if not await uow.carts.claim_for_checkout(cart.id, cart.version):
                    logger.info(f"[{execution_id}] Cart {cart.id} changed during checkout")
                    raise OrderAlreadyProcessed(
                        f"Cart {cart.id} was already checked out or changed; reload it and retry"
                    )
            else:
                pricing = await self._settlement.price_items(
                    uow,
                    request.restaurant_id,
                    [(item.product_id, item.quantity) for item in request.items],
                    coupon_code=request.coupon_code,
                )

            order = Order.place(
                client_id=client.id,
                restaurant_id=request.restaurant_id,
                payment_method=request.payment_method,
                items=pricing.items,
                delivery_fee=pricing.delivery_fee,
                discount=pricing.discount,
                coupon_id=pricing.coupon.id if pricing.coupon else None,
                delivery_address=address,
                change_for=request.change_for,
                notes=request.notes,
            )
            await uow.orders.add(order)

            if pricing.coupon is not None:
                await self._settlement.redeem_coupon(uow, pricing.coupon)

            if cart is not None:
                cart.clear()
                await uow.carts.save(cart)

            if geocoded and address.address_id is not None:
                await uow.addresses.store_client_coordinates(
                    client.id, address.address_id, address.coordinates
                )

            await uow.commit()
            logger.info(
                f"[{execution_id}] Order {order.id} created: subtotal {order.subtotal}, "
                f"discount {order.discount}, fee {order.delivery_fee}, total {order.total}"
            )

        order.record_creation()
        await self._publish(order)
        return OrderDTO.from_domain(order)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    async def confirm_order(self, actor: Actor, order_id: int) -> OrderDTO:
        """CREATED -> CONFIRMED (payment confirmation)."""
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            order.confirm()
            ensure_can_confirm(actor, await self._parties(uow, order))
            return await self._commit(uow, order, actor, "confirmed")

    async def start_preparing(self, actor: Actor, order_id: int) -> OrderDTO:
        """CONFIRMED -> PREPARING (restaurant owner)."""
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            order.start_preparing()
            ensure_restaurant_owner(actor, await self._parties(uow, order))
            return await self._commit(uow, order, actor, "marked as PREPARING")

    async def mark_out_for_delivery(self, actor: Actor, order_id: int) -> OrderDTO:
        """PREPARING -> OUT_FOR_DELIVERY (assigned courier)."""
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            order.dispatch()
            ensure_assigned_courier(
                actor,
                await self._parties(uow, order),
                "Only the assigned courier can start this delivery",
            )
            await self._bootstrap_courier_position(uow, order)
            return await self._commit(uow, order, actor, "out for delivery")

    async def mark_delivered(self, actor: Actor, order_id: int) -> OrderDTO:
        """OUT_FOR_DELIVERY -> DELIVERED (assigned courier), then settle."""
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            order.deliver()
            ensure_assigned_courier(
                actor,
                await self._parties(uow, order),
                "Only the assigned courier can complete this delivery",
            )
            await self._settlement.calculate_and_apply_final_values(order)
            return await self._commit(uow, order, actor, "delivered")

    async def cancel_order(self, actor: Actor, order_id: int, reason: Optional[str] = None) -> OrderDTO:
        """Any non-terminal status -> CANCELED, then refund a captured payment."""
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            order.ensure_cancelable()
            ensure_can_cancel(actor, await self._parties(uow, order), order.status)
            order.cancel(reason)
            result = await self._commit(uow, order, actor, "canceled")

        await self._settlement.refund_if_captured(order.id)
        return result

    async def refund_order(self, actor: Actor, order_id: int, reason: str) -> RefundDTO:
        """Explicit refund of an order's payment (administrators only)."""
        ensure_admin(actor, "Only administrators can issue refunds")
        uow = create_uow(self._session_factory)
        async with uow:
            await self._get(uow, order_id)

        refund = await self._settlement.refund(actor, order_id, reason)
        return RefundDTO(
            order_id=refund.order_id,
            status=refund.status,
            amount=refund.amount,
            reason=refund.reason,
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_order(self, actor: Actor, order_id: int) -> OrderDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._get(uow, order_id)
            ensure_can_view(actor, await self._parties(uow, order))
            return OrderDTO.from_domain(order)

    async def list_client_orders(self, actor: Actor, limit: int = 100) -> List[OrderDTO]:
        """Orders of the calling client, newest first."""
        uow = create_uow(self._session_factory)
        async with uow:
            client = await self._client_for(uow, actor)
            orders = await uow.orders.find_by_client(client.id, limit=limit)
            return [OrderDTO.from_domain(order) for order in orders]

    async def list_restaurant_orders(self, actor: Actor, limit: int = 100) -> List[OrderDTO]:
        """Orders of the calling restaurant owner, newest first."""
        ensure_role(actor, ActorRole.RESTAURANT, "Only restaurant owners can list restaurant orders")
        uow = create_uow(self._session_factory)
        async with uow:
            restaurant = await uow.restaurants.find_by_owner(actor.user_id)
            if restaurant is None:
                raise AccessDenied("No restaurant profile for the current user")
            orders = await uow.orders.find_by_restaurant(restaurant.id, limit=limit)
            return [OrderDTO.from_domain(order) for order in orders]

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @staticmethod
    async def _get(uow: UnitOfWork, order_id: int) -> Order:
        order = await uow.orders.find_by_id(order_id)
        if order is None:
            raise ResourceNotFound(f"Order {order_id} not found")
        return order

    @staticmethod
    async def _client_for(uow: UnitOfWork, actor: Actor) -> Client:
        ensure_role(actor, ActorRole.CLIENT, "Only clients can perform this operation")
        client = await uow.clients.find_by_user_id(actor.user_id)
        if client is None:
            raise AccessDenied("No client profile for the current user")
        return client

    @staticmethod
    async def _parties(uow: UnitOfWork, order: Order) -> OrderParties:
        client = await uow.clients.find_by_id(order.client_id)
        restaurant = await uow.restaurants.find_by_id(order.restaurant_id)
        courier = await uow.couriers.find_by_id(order.courier_id) if order.courier_id else None
        return OrderParties(
            client_user_id=client.user_id if client else None,
            restaurant_owner_id=restaurant.owner_user_id if restaurant else None,
            courier_user_id=courier.user_id if courier else None,
        )

    @staticmethod
    async def _delivery_address(uow: UnitOfWork, client: Client, request: CreateOrderRequest) -> Address:
        if request.delivery_address is not None:
            return request.delivery_address.to_domain()

        if request.address_id is not None:
            address = await uow.addresses.find_for_client(client.id, request.address_id)
            if address is None:
                raise ResourceNotFound(f"Address {request.address_id} not found")
            return address

        address = await uow.addresses.find_principal_for_client(client.id)
        if address is None:
            raise InvalidArgument("No delivery address given and the client has no principal address")
        return address

    async def _geocode(self, address: Address):
        """Best-effort coordinate lookup; returns (address, geocoded)."""
        if self._geocoder is None:
            return address, False
        try:
            coordinates = await self._geocoder.geocode(address.to_geocoding_string())
        except Exception as e:
            logger.warning(f"Geocoding failed for delivery address: {e}", exc_info=True)
            return address, False

        if coordinates is None:
            logger.info("Delivery address could not be geocoded; ETA will use the default")
            return address, False
        return address.with_coordinates(coordinates), True

    async def _bootstrap_courier_position(self, uow: UnitOfWork, order: Order) -> None:
        if order.courier_id is None:
            return
        courier = await uow.couriers.find_by_id(order.courier_id)
        if courier is None or courier.has_position:
            return

        origin = await uow.addresses.find_principal_for_restaurant(order.restaurant_id)
        if await self._position_tracker.initialize_position(courier, origin):
            await uow.couriers.save(courier)

    async def _commit(self, uow: UnitOfWork, order: Order, actor: Actor, what: str) -> OrderDTO:
        await uow.orders.save(order)
        await uow.commit()
        logger.info(f"[{uow.execution_id}] Order {order.id} {what} by {actor}")

        await self._publish(order)
        return OrderDTO.from_domain(order)

    async def _publish(self, order: Order) -> None:
        events = order.get_domain_events()
        order.clear_domain_events()
        await self._event_bus.publish_all(events)
