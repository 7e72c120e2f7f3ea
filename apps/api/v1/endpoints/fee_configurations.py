"""Platform commission-rate endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from core.application.dtos import FeeConfigurationDTO, FeeConfigurationRequest
from core.application.services import FeeConfigurationService
from core.domain.enums import FeeCategory
from core.domain.value_objects import Actor

from apps.api.deps import get_current_actor, get_fee_configuration_service

router = APIRouter(prefix="/fee-configurations", tags=["fee-configurations"])


@router.post("", response_model=FeeConfigurationDTO, status_code=201)
async def create_configuration(
    request: FeeConfigurationRequest,
    actor: Actor = Depends(get_current_actor),
    service: FeeConfigurationService = Depends(get_fee_configuration_service),
) -> FeeConfigurationDTO:
    """Set a new rate for a category; earlier rates of that category are retired."""
    return await service.create_configuration(actor, request)


@router.get("/{category}/active", response_model=FeeConfigurationDTO)
async def get_active_configuration(
    category: FeeCategory,
    actor: Actor = Depends(get_current_actor),
    service: FeeConfigurationService = Depends(get_fee_configuration_service),
) -> FeeConfigurationDTO:
    return await service.get_active_configuration(actor, category)


@router.get("/{category}/history", response_model=List[FeeConfigurationDTO])
async def list_history(
    category: FeeCategory,
    actor: Actor = Depends(get_current_actor),
    service: FeeConfigurationService = Depends(get_fee_configuration_service),
) -> List[FeeConfigurationDTO]:
    return await service.list_history(actor, category)
