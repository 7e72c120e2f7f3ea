from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import FulfillmentBaseSettings


class PaymentSettings(FulfillmentBaseSettings):
    """
    Payment service settings.

    An empty service_url selects the in-memory gateway.
    """

    service_url: str = Field("", alias="PAYMENT_SERVICE_URL")
    timeout_seconds: float = Field(10.0, alias="PAYMENT_TIMEOUT_SECONDS", gt=0)
