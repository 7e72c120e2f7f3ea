"""SQLAlchemy implementation of CartRepository."""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from core.domain.entities.cart import Cart
from core.domain.exceptions import ResourceNotFound
from core.domain.repositories.cart_repository import CartRepository

from ..mappers import CartMapper
from ..models.cart_model import CartModel
from .base import SqlAlchemyRepository


class SqlAlchemyCartRepository(SqlAlchemyRepository, CartRepository):

    async def find_by_id(self, cart_id: int) -> Optional[Cart]:
        model = await self._load(CartModel.id == self._check_id(cart_id, "cart id"))
        return CartMapper.to_domain(model) if model else None

    async def find_by_client(self, client_id: int) -> Optional[Cart]:
        model = await self._load(CartModel.client_id == self._check_id(client_id, "client id"))
        return CartMapper.to_domain(model) if model else None

    async def save(self, cart: Cart) -> Cart:
        """Insert or update the cart; returns it reloaded with generated item ids."""
        if cart.id is None:
            model = CartModel(client_id=cart.client_id, version=0)
            CartMapper.update_persistence(cart, model)
            self._session.add(model)
        else:
            model = await self._load(CartModel.id == self._check_id(cart.id, "cart id"))
            if model is None:
                raise ResourceNotFound(f"Cart {cart.id} not found")
            CartMapper.update_persistence(cart, model)
            model.version = (model.version or 0) + 1

        await self._session.flush()
        return await self.find_by_id(model.id)

    async def claim_for_checkout(self, cart_id: int, version: int) -> bool:
        """Take the cart for one checkout if nobody changed it since it was read.

        Compare-and-set on the version column: of several concurrent
        checkouts that priced the same cart state, exactly one matches.
        """
        result = await self._session.execute(
            update(CartModel)
            .where(
                CartModel.id == self._check_id(cart_id, "cart id"),
                CartModel.version == version,
            )
            .values(version=CartModel.version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def _load(self, clause) -> Optional[CartModel]:
        result = await self._session.execute(
            select(CartModel)
            .where(clause)
            .options(selectinload(CartModel.items), selectinload(CartModel.coupon))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
