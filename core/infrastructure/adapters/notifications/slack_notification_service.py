"""
Slack Notification Service Implementation.

Sends notifications via Slack Webhook API.
"""
from decimal import Decimal
from typing import Optional
import logging
import aiohttp

from core.application.interfaces import INotificationService
from core.settings.modules.integrations_settings import SlackSettings


logger = logging.getLogger(__name__)


class SlackNotificationService(INotificationService):
    """
    Slack implementation of notification service.

    Posts every notification to one operations channel webhook.
    """

    def __init__(self, settings: SlackSettings):
        """
        Initialize Slack notification service.

        Args:
            settings: Slack settings with webhook URL
        """
        self.settings = settings
        self.webhook_url = settings.webhook_url
        self.prefix = settings.prefix
        logger.info("SlackNotificationService initialized")

    async def notify_order_status_change(
        self,
        order_id: int,
        client_email: Optional[str],
        client_phone: Optional[str],
        status: str,
    ) -> None:
        """Send order status update via Slack."""
        text = (
            f"📦 *Order #{order_id}* is now *{status}*\n"
            f"Client: {client_email or '-'} / {client_phone or '-'}"
        )
        await self._send_message(text, color="good")

    async def notify_restaurant_new_order(
        self,
        order_id: int,
        restaurant_email: Optional[str],
        total: Decimal,
    ) -> None:
        """Send restaurant order alert via Slack."""
        text = (
            f"🍽️ *Order #{order_id}* for restaurant {restaurant_email or '-'}\n"
            f"Total: `{total}`"
        )
        await self._send_message(text, color="warning")

    async def notify_new_order_available(
        self,
        order_id: int,
        courier_email: Optional[str],
        courier_phone: Optional[str],
        address: str,
        total: Decimal,
    ) -> None:
        """Send pickup offer via Slack."""
        text = (
            f"🛵 *Order #{order_id}* available for {courier_email or courier_phone or 'courier'}\n"
            f"Deliver to: {address}\n"
            f"Total: `{total}`"
        )
        await self._send_message(text, color="good")

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        color = "danger" if severity >= 80 else "warning" if severity >= 50 else "good"
        await self._send_message(message, color=color)

    async def _send_message(self, text: str, color: str = "good") -> None:
        """
        Send message to Slack.

        Args:
            text: Message text
            color: Attachment color (good, warning, danger)
        """
        if not self.settings.enabled or not self.webhook_url:
            logger.warning("Slack webhook not configured, skipping notification")
            return

        payload = {
            "attachments": [
                {
                    "color": color,
                    "text": f"{self.prefix} {text}" if self.prefix else text,
                    "mrkdwn_in": ["text"],
                }
            ]
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.webhook_url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f"Slack API error: {response.status} - {error_text}")
                    else:
                        logger.info("Slack notification sent successfully")
        except aiohttp.ClientError as e:
            logger.error(f"Failed to send Slack notification: {e}", exc_info=True)
