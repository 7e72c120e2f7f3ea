"""Payment gateway interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.domain.enums import PaymentStatus


@dataclass(frozen=True)
class PaymentInfo:
    """Payment as reported by the gateway."""
    order_id: int
    status: PaymentStatus
    amount: Decimal
    payment_id: Optional[str] = None


@dataclass(frozen=True)
class RefundInfo:
    order_id: int
    status: PaymentStatus
    amount: Decimal
    reason: str


class IPaymentGateway(ABC):
    """Interface to the external payment collaborator."""

    @abstractmethod
    async def get_payment_for_order(self, order_id: int) -> Optional[PaymentInfo]:
        """
        Look up the payment of an order.

        Returns:
            PaymentInfo, or None if the order has no payment record

        Raises:
            PaymentGatewayError: gateway failure
        """
        pass

    @abstractmethod
    async def refund(self, order_id: int, reason: str) -> RefundInfo:
        """
        Refund the payment of an order.

        Raises:
            PaymentGatewayError: gateway refused or failed
        """
        pass
