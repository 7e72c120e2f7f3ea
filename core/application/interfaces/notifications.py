"""Notification dispatch interface."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class INotificationService(ABC):
    """
    Interface for notification service operations.

    Implementations deliver messages (email, SMS, Slack, ...). The core
    never awaits them directly; they are invoked from event subscribers.
    """

    @abstractmethod
    async def notify_order_status_change(
        self,
        order_id: int,
        client_email: Optional[str],
        client_phone: Optional[str],
        status: str,
    ) -> None:
        """
        Tell a client their order changed status.

        Args:
            order_id: Order id
            client_email: Client e-mail, if known
            client_phone: Client phone, if known
            status: New status label
        """
        pass

    @abstractmethod
    async def notify_restaurant_new_order(
        self,
        order_id: int,
        restaurant_email: Optional[str],
        total: Decimal,
    ) -> None:
        """
        Tell a restaurant about an order that needs its attention.

        Args:
            order_id: Order id
            restaurant_email: Restaurant e-mail, if known
            total: Order total
        """
        pass

    @abstractmethod
    async def notify_new_order_available(
        self,
        order_id: int,
        courier_email: Optional[str],
        courier_phone: Optional[str],
        address: str,
        total: Decimal,
    ) -> None:
        """
        Tell a courier an order is waiting for pickup.

        Args:
            order_id: Order id
            courier_email: Courier e-mail, if known
            courier_phone: Courier phone, if known
            address: Human-readable delivery address
            total: Order total
        """
        pass

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        pass
