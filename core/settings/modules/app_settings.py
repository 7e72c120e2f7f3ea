from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.delivery_settings import DeliverySettings
from core.settings.modules.integrations_settings import LoggingSettings, SlackSettings
from core.settings.modules.payment_settings import PaymentSettings
from core.settings.modules.routing_settings import GeocodingSettings, RoutingSettings


class IntegrationsSettings(BaseModel):
    """Aggregates integrations settings as nested objects."""

    model_config = ConfigDict(extra="ignore")

    slack: SlackSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    delivery: DeliverySettings
    routing: RoutingSettings
    geocoding: GeocodingSettings
    payment: PaymentSettings
    logging: LoggingSettings
    integrations: IntegrationsSettings

    @property
    def slack(self) -> SlackSettings:
        return self.integrations.slack


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        delivery=DeliverySettings(),
        routing=RoutingSettings(),
        geocoding=GeocodingSettings(),
        payment=PaymentSettings(),
        logging=LoggingSettings(),
        integrations=IntegrationsSettings(slack=SlackSettings()),
    )
