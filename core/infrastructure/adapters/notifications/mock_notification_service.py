"""
Mock Notification Service Implementation.

This simulates notifications for testing and demos.
"""
from decimal import Decimal
from typing import Optional
import logging

from core.application.interfaces import INotificationService


logger = logging.getLogger(__name__)


class MockNotificationService(INotificationService):
    """
    Mock implementation of notification service.

    Logs notifications instead of actually sending them.
    Useful for testing and demos.
    """

    def __init__(self):
        """Initialize mock notification service."""
        self.notifications_sent = []
        logger.info("MockNotificationService initialized (console logging)")

    async def notify_order_status_change(
        self,
        order_id: int,
        client_email: Optional[str],
        client_phone: Optional[str],
        status: str,
    ) -> None:
        self.notifications_sent.append(
            {
                "type": "order_status",
                "order_id": order_id,
                "email": client_email,
                "phone": client_phone,
                "status": status,
            }
        )
        logger.info(f"🔔 Order #{order_id} is now {status} (client: {client_email or client_phone})")

    async def notify_restaurant_new_order(
        self,
        order_id: int,
        restaurant_email: Optional[str],
        total: Decimal,
    ) -> None:
        self.notifications_sent.append(
            {
                "type": "restaurant_order",
                "order_id": order_id,
                "email": restaurant_email,
                "total": total,
            }
        )
        logger.info(f"🔔 Restaurant {restaurant_email}: order #{order_id} ({total})")

    async def notify_new_order_available(
        self,
        order_id: int,
        courier_email: Optional[str],
        courier_phone: Optional[str],
        address: str,
        total: Decimal,
    ) -> None:
        self.notifications_sent.append(
            {
                "type": "order_available",
                "order_id": order_id,
                "email": courier_email,
                "phone": courier_phone,
                "address": address,
                "total": total,
            }
        )
        logger.info(f"🔔 Courier {courier_email or courier_phone}: order #{order_id} available at {address}")

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        self.notifications_sent.append(
            {
                "type": "generic",
                "message": message,
                "severity": severity,
            }
        )

        severity_emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        logger.info(f"{severity_emoji} 🔔 NOTIFICATION (severity={severity}): {message}")

    def get_notifications(self, kind: Optional[str] = None) -> list:
        """Get sent notifications, optionally of one type (for testing)."""
        if kind is None:
            return list(self.notifications_sent)
        return [n for n in self.notifications_sent if n["type"] == kind]

    def clear(self) -> None:
        """Clear notifications (for testing)."""
        self.notifications_sent.clear()
