"""Application service for client carts."""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import CartDTO
from core.application.validators import (
    raise_if_invalid,
    validate_coupon_code,
    validate_positive_id,
    validate_quantity,
)
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import Cart, Client
from core.domain.enums import ActorRole
from core.domain.exceptions import AccessDenied, CouponNotFound, ProductNotFound, ProductUnavailable
from core.domain.services.coupon_resolver import validate_applicable
from core.domain.services.order_access import ensure_role
from core.domain.value_objects import Actor

logger = logging.getLogger(__name__)


class CartService:
    """
    One cart per client, created on first access.

    Coupons are validated against the cart subtotal when attached but only
    redeemed when the cart becomes an order.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def get_cart(self, actor: Actor) -> CartDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            await uow.commit()
            return CartDTO.from_domain(cart)

    async def add_item(self, actor: Actor, product_id: int, quantity: int) -> CartDTO:
        raise_if_invalid(
            validate_positive_id(product_id, "product_id") + validate_quantity(quantity)
        )

        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            product = await uow.products.find_by_id(product_id)
            if product is None:
                raise ProductNotFound(f"Product {product_id} not found")
            if not product.available:
                raise ProductUnavailable(f"Product {product.name} is not available")

            cart.add_product(product, quantity)
            return await self._store(uow, cart, f"added product {product_id} x{quantity}")

    async def update_quantity(self, actor: Actor, item_id: int, quantity: int) -> CartDTO:
        raise_if_invalid(validate_positive_id(item_id, "item_id") + validate_quantity(quantity))

        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            cart.update_quantity(item_id, quantity)
            return await self._store(uow, cart, f"item {item_id} set to {quantity}")

    async def remove_item(self, actor: Actor, item_id: int) -> CartDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            cart.remove_item(item_id)
            return await self._store(uow, cart, f"item {item_id} removed")

    async def apply_coupon(self, actor: Actor, code: str) -> CartDTO:
        raise_if_invalid(validate_coupon_code(code))

        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            coupon = await uow.coupons.find_by_code(code)
            if coupon is None:
                raise CouponNotFound(f"Coupon {code} not found")
            validate_applicable(coupon, cart.subtotal)

            cart.attach_coupon(coupon)
            return await self._store(uow, cart, f"coupon {coupon.code} attached")

    async def remove_coupon(self, actor: Actor) -> CartDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            cart.detach_coupon()
            return await self._store(uow, cart, "coupon removed")

    async def clear(self, actor: Actor) -> CartDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            cart = await self._load_cart(uow, actor)
            cart.clear()
            return await self._store(uow, cart, "cleared")

    async def _load_cart(self, uow: UnitOfWork, actor: Actor) -> Cart:
        client = await self._client_for(uow, actor)
        cart = await uow.carts.find_by_client(client.id)
        if cart is None:
            cart = await uow.carts.save(Cart(client_id=client.id))
            logger.info(f"[{uow.execution_id}] Cart created for client {client.id}")
        return cart

    @staticmethod
    async def _client_for(uow: UnitOfWork, actor: Actor) -> Client:
        ensure_role(actor, ActorRole.CLIENT, "Only clients have a cart")
        client = await uow.clients.find_by_user_id(actor.user_id)
        if client is None:
            raise AccessDenied("No client profile for the current user")
        return client

    @staticmethod
    async def _store(uow: UnitOfWork, cart: Cart, change: str) -> CartDTO:
        stored = await uow.carts.save(cart)
        await uow.commit()
        logger.info(f"[{uow.execution_id}] Cart {stored.id}: {change}")
        return CartDTO.from_domain(stored)
