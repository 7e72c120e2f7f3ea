"""Application service for commission-rate configuration."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import FeeConfigurationDTO, FeeConfigurationRequest
from core.application.interfaces import IFeeRateProvider
from core.application.validators import raise_if_invalid, validate_fee_configuration
from core.data.uow import create_uow
from core.domain.entities import FeeConfiguration
from core.domain.enums import FeeCategory
from core.domain.exceptions import ResourceNotFound
from core.domain.services.monetary import money
from core.domain.services.order_access import ensure_admin
from core.domain.value_objects import Actor

logger = logging.getLogger(__name__)


class FeeConfigurationService(IFeeRateProvider):
    """
    Versioned platform-fee rates per category.

    Exactly one configuration per category is active; creating a new one
    retires the previous ones in the same transaction.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def create_configuration(
        self, actor: Actor, request: FeeConfigurationRequest
    ) -> FeeConfigurationDTO:
        ensure_admin(actor, "Only administrators can change platform fees")
        raise_if_invalid(validate_fee_configuration(request))

        uow = create_uow(self._session_factory)
        async with uow:
            retired = await uow.fee_configurations.deactivate_all(request.category)
            created = await uow.fee_configurations.add(
                FeeConfiguration(category=request.category, percent=money(request.percent))
            )
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] {request.category.value} fee set to {created.percent}% "
                f"({retired} previous configuration(s) retired)"
            )
            return FeeConfigurationDTO.from_domain(created)

    async def get_active_rate(self, category: FeeCategory) -> Optional[Decimal]:
        uow = create_uow(self._session_factory)
        async with uow:
            configuration = await uow.fee_configurations.find_active(category)
            return configuration.percent if configuration else None

    async def get_active_configuration(self, actor: Actor, category: FeeCategory) -> FeeConfigurationDTO:
        ensure_admin(actor)
        uow = create_uow(self._session_factory)
        async with uow:
            configuration = await uow.fee_configurations.find_active(category)
            if configuration is None:
                raise ResourceNotFound(f"No active {category.value} fee configuration")
            return FeeConfigurationDTO.from_domain(configuration)

    async def list_history(self, actor: Actor, category: FeeCategory) -> List[FeeConfigurationDTO]:
        ensure_admin(actor)
        uow = create_uow(self._session_factory)
        async with uow:
            history = await uow.fee_configurations.find_history(category)
            return [FeeConfigurationDTO.from_domain(c) for c in history]
