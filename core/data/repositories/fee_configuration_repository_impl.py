"""SQLAlchemy implementation of FeeConfigurationRepository."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update

from core.domain.entities.fee_configuration import FeeConfiguration
from core.domain.enums import FeeCategory
from core.domain.repositories.fee_configuration_repository import FeeConfigurationRepository

from ..mappers import FeeConfigurationMapper
from ..models.fee_configuration_model import FeeConfigurationModel
from .base import SqlAlchemyRepository


class SqlAlchemyFeeConfigurationRepository(SqlAlchemyRepository, FeeConfigurationRepository):

    async def add(self, configuration: FeeConfiguration) -> FeeConfiguration:
        model = FeeConfigurationMapper.to_persistence(configuration)
        self._session.add(model)
        await self._session.flush()
        return FeeConfigurationMapper.to_domain(model)

    async def find_active(self, category: FeeCategory) -> Optional[FeeConfiguration]:
        result = await self._session.execute(
            select(FeeConfigurationModel)
            .where(
                FeeConfigurationModel.category == category.value,
                FeeConfigurationModel.active.is_(True),
            )
            .order_by(FeeConfigurationModel.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return FeeConfigurationMapper.to_domain(model) if model else None

    async def find_history(self, category: FeeCategory) -> List[FeeConfiguration]:
        result = await self._session.execute(
            select(FeeConfigurationModel)
            .where(FeeConfigurationModel.category == category.value)
            .order_by(FeeConfigurationModel.created_at.desc(), FeeConfigurationModel.id.desc())
            .execution_options(populate_existing=True)
        )
        return [FeeConfigurationMapper.to_domain(m) for m in result.scalars().all()]

    async def deactivate_all(self, category: FeeCategory) -> int:
        result = await self._session.execute(
            update(FeeConfigurationModel)
            .where(
                FeeConfigurationModel.category == category.value,
                FeeConfigurationModel.active.is_(True),
            )
            .values(active=False, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
