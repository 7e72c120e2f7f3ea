"""Application DTOs for commission-rate configuration."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from core.domain.entities.fee_configuration import FeeConfiguration
from core.domain.enums import FeeCategory


class FeeConfigurationRequest(BaseModel):
    category: FeeCategory = Field(..., description="RESTAURANT or COURIER")
    percent: Decimal = Field(..., description="Commission percent (0-100)")

    model_config = {"frozen": True}


class FeeConfigurationDTO(BaseModel):
    id: int
    category: FeeCategory
    percent: Decimal
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, configuration: FeeConfiguration) -> "FeeConfigurationDTO":
        return cls(
            id=configuration.id,
            category=configuration.category,
            percent=configuration.percent,
            active=configuration.active,
            created_at=configuration.created_at,
            updated_at=configuration.updated_at,
        )
