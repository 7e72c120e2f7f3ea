# Settings modules
from .app_settings import AppSettings, get_app_settings, IntegrationsSettings
from .delivery_settings import DeliverySettings
from .integrations_settings import LoggingSettings, SlackSettings
from .payment_settings import PaymentSettings
from .routing_settings import GeocodingSettings, RoutingSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "IntegrationsSettings",
    "DeliverySettings",
    "GeocodingSettings",
    "LoggingSettings",
    "PaymentSettings",
    "RoutingSettings",
    "SlackSettings",
]
