from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import FulfillmentBaseSettings


class SlackSettings(FulfillmentBaseSettings):
    """
    Slack integration settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(False, alias="SLACK_ENABLED")
    webhook_url: str = Field("", alias="SLACK_WEBHOOK_URL")
    prefix: str = Field("[fulfillment]", alias="SLACK_PREFIX")


class LoggingSettings(FulfillmentBaseSettings):
    level: str = Field("INFO", alias="LOG_LEVEL")
