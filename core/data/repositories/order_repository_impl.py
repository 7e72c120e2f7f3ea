"""SQLAlchemy implementation of OrderRepository."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import OrderAlreadyProcessed, ResourceNotFound
from core.domain.repositories.order_repository import OrderRepository

from ..mappers import OrderMapper
from ..models.order_model import OrderModel
from .base import SqlAlchemyRepository

logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(SqlAlchemyRepository, OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    async def add(self, order: Order) -> Order:
        """Insert a new order with its items and assign the generated id."""
        model = OrderMapper.to_persistence(order)
        self._session.add(model)
        await self._session.flush()  # Propagate to DB without committing

        order.id = model.id
        order.version = model.version
        return order

    async def save(self, order: Order) -> None:
        """Persist status/settlement changes with an optimistic version check.

        Raises:
            ResourceNotFound: order row does not exist
            OrderAlreadyProcessed: the row changed since the order was loaded
        """
        model = await self._load(self._check_id(order.id, "order id"))
        if model is None:
            raise ResourceNotFound(f"Order {order.id} not found")
        if model.version != order.version:
            raise OrderAlreadyProcessed(
                f"Order {order.id} was modified concurrently; reload and retry"
            )

        OrderMapper.update_persistence(order, model)
        try:
            await self._session.flush()
        except StaleDataError as e:
            logger.info(f"Stale write rejected for order {order.id} (version {order.version})")
            raise OrderAlreadyProcessed(
                f"Order {order.id} was modified concurrently; reload and retry"
            ) from e

        order.version = model.version

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        model = await self._load(self._check_id(order_id, "order id"))
        if model is None:
            return None
        return OrderMapper.to_domain(model)

    async def claim_courier(self, order_id: int, courier_id: int) -> bool:
        """Bind the courier only if the order is still PREPARING and unclaimed.

        The status/courier check and the write are a single UPDATE, so at
        most one concurrent claim can match the row.
        """
        stmt = (
            update(OrderModel)
            .where(
                OrderModel.id == self._check_id(order_id, "order id"),
                OrderModel.status == OrderStatus.PREPARING.value,
                OrderModel.courier_id.is_(None),
            )
            .values(courier_id=courier_id, version=OrderModel.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def find_available(self, limit: int = 100) -> List[Order]:
        stmt = (
            self._select()
            .where(
                OrderModel.status == OrderStatus.PREPARING.value,
                OrderModel.courier_id.is_(None),
            )
            .order_by(OrderModel.created_at.asc(), OrderModel.id.asc())
            .limit(limit)
        )
        return await self._fetch(stmt)

    async def find_by_courier(
        self,
        courier_id: int,
        statuses: Optional[Iterable[OrderStatus]] = None,
        exclude_statuses: Optional[Iterable[OrderStatus]] = None,
    ) -> List[Order]:
        stmt = self._select().where(OrderModel.courier_id == self._check_id(courier_id, "courier id"))
        if statuses is not None:
            stmt = stmt.where(OrderModel.status.in_([s.value for s in statuses]))
        if exclude_statuses is not None:
            stmt = stmt.where(OrderModel.status.not_in([s.value for s in exclude_statuses]))
        stmt = stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return await self._fetch(stmt)

    async def find_by_client(self, client_id: int, limit: int = 100) -> List[Order]:
        stmt = (
            self._select()
            .where(OrderModel.client_id == self._check_id(client_id, "client id"))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
        )
        return await self._fetch(stmt)

    async def find_by_restaurant(self, restaurant_id: int, limit: int = 100) -> List[Order]:
        stmt = (
            self._select()
            .where(OrderModel.restaurant_id == self._check_id(restaurant_id, "restaurant id"))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
        )
        return await self._fetch(stmt)

    @staticmethod
    def _select():
        # populate_existing: conditional UPDATEs bypass the identity map
        return (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        )

    async def _load(self, order_id: int) -> Optional[OrderModel]:
        result = await self._session.execute(self._select().where(OrderModel.id == order_id))
        return result.scalar_one_or_none()

    async def _fetch(self, stmt) -> List[Order]:
        result = await self._session.execute(stmt)
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]
