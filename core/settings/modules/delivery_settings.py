from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from core.settings.base_settings import FulfillmentBaseSettings


class DeliverySettings(FulfillmentBaseSettings):
    """
    Delivery fee and ETA estimation settings.
    Loaded from .env file with exact variable name matching.
    """

    delivery_fee: Decimal = Field(Decimal("5.00"), alias="DELIVERY_FEE", ge=0)
    free_delivery_threshold: Decimal = Field(
        Decimal("50.00"), alias="FREE_DELIVERY_THRESHOLD", ge=0
    )

    default_eta_minutes: int = Field(30, alias="DEFAULT_ETA_MINUTES", gt=0)
    min_eta_minutes: int = Field(1, alias="MIN_ETA_MINUTES", gt=0)
    max_eta_minutes: int = Field(120, alias="MAX_ETA_MINUTES", gt=0)
    min_distance_km: Decimal = Field(Decimal("0.1"), alias="MIN_DISTANCE_KM", gt=0)

    bicycle_speed_kmh: float = Field(15.0, alias="BICYCLE_SPEED_KMH", gt=0)
    motor_speed_kmh: float = Field(30.0, alias="MOTOR_SPEED_KMH", gt=0)
