"""
Mock Payment Gateway Implementation.

Keeps payments in memory for tests, demos and local runs.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional

from core.application.interfaces import IPaymentGateway, PaymentInfo, RefundInfo
from core.domain.enums import PaymentStatus
from core.domain.exceptions import PaymentGatewayError


logger = logging.getLogger(__name__)


class MockPaymentGateway(IPaymentGateway):
    """In-memory payment gateway."""

    def __init__(self):
        self.payments: Dict[int, PaymentInfo] = {}
        self.refunds: List[RefundInfo] = []
        logger.info("MockPaymentGateway initialized")

    def register_payment(
        self,
        order_id: int,
        status: PaymentStatus,
        amount: Decimal,
        payment_id: Optional[str] = None,
    ) -> PaymentInfo:
        """Record a payment as if the provider had reported it (for testing)."""
        payment = PaymentInfo(
            order_id=order_id,
            status=status,
            amount=amount,
            payment_id=payment_id or f"mock-{order_id}",
        )
        self.payments[order_id] = payment
        return payment

    async def get_payment_for_order(self, order_id: int) -> Optional[PaymentInfo]:
        return self.payments.get(order_id)

    async def refund(self, order_id: int, reason: str) -> RefundInfo:
        payment = self.payments.get(order_id)
        if payment is None:
            raise PaymentGatewayError(f"No payment found for order {order_id}", status_code=404)
        if not payment.status.is_refundable:
            raise PaymentGatewayError(
                f"Payment for order {order_id} is {payment.status.value} and cannot be refunded",
                status_code=409,
            )

        self.payments[order_id] = PaymentInfo(
            order_id=order_id,
            status=PaymentStatus.REFUNDED,
            amount=payment.amount,
            payment_id=payment.payment_id,
        )
        refund = RefundInfo(
            order_id=order_id,
            status=PaymentStatus.REFUNDED,
            amount=payment.amount,
            reason=reason,
        )
        self.refunds.append(refund)
        logger.info(f"Mock refund for order {order_id}: {reason}")
        return refund
