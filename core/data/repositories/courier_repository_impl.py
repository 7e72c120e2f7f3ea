"""SQLAlchemy implementation of CourierRepository."""

from typing import Optional

from sqlalchemy import select

from core.domain.entities.courier import Courier
from core.domain.exceptions import ResourceNotFound
from core.domain.repositories.courier_repository import CourierRepository

from ..mappers import CourierMapper
from ..models.courier_model import CourierModel
from .base import SqlAlchemyRepository


class SqlAlchemyCourierRepository(SqlAlchemyRepository, CourierRepository):

    async def find_by_id(self, courier_id: int) -> Optional[Courier]:
        model = await self._session.get(CourierModel, self._check_id(courier_id, "courier id"))
        return CourierMapper.to_domain(model) if model else None

    async def find_by_user_id(self, user_id: int) -> Optional[Courier]:
        result = await self._session.execute(
            select(CourierModel).where(CourierModel.user_id == self._check_id(user_id, "user id"))
        )
        model = result.scalar_one_or_none()
        return CourierMapper.to_domain(model) if model else None

    async def save(self, courier: Courier) -> None:
        model = await self._session.get(CourierModel, self._check_id(courier.id, "courier id"))
        if model is None:
            raise ResourceNotFound(f"Courier {courier.id} not found")
        CourierMapper.update_persistence(courier, model)
        await self._session.flush()
