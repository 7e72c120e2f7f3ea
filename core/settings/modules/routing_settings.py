from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import FulfillmentBaseSettings


class RoutingSettings(FulfillmentBaseSettings):
    """
    OSRM routing service settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(True, alias="OSRM_ENABLED")
    base_url: str = Field("https://router.project-osrm.org", alias="OSRM_BASE_URL")
    timeout_seconds: float = Field(5.0, alias="OSRM_TIMEOUT_SECONDS", gt=0)


class GeocodingSettings(FulfillmentBaseSettings):
    """
    Nominatim geocoding settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(True, alias="GEOCODING_ENABLED")
    base_url: str = Field("https://nominatim.openstreetmap.org", alias="NOMINATIM_BASE_URL")
    timeout_seconds: float = Field(5.0, alias="GEOCODING_TIMEOUT_SECONDS", gt=0)
    user_agent: str = Field("fulfillment-engine/0.1", alias="GEOCODING_USER_AGENT")
