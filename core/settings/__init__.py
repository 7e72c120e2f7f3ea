"""Typed configuration for the fulfillment engine, loaded from the environment and .env."""
from core.settings.modules import (
    AppSettings,
    DeliverySettings,
    get_app_settings,
    IntegrationsSettings,
    PaymentSettings,
    RoutingSettings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "DeliverySettings",
    "IntegrationsSettings",
    "PaymentSettings",
    "RoutingSettings",
]
