"""
HTTP Payment Gateway Implementation.

Talks to the payment service over its REST API.
"""
import asyncio
import logging
from decimal import Decimal
from typing import Optional

import aiohttp

from core.application.interfaces import IPaymentGateway, PaymentInfo, RefundInfo
from core.domain.enums import PaymentStatus
from core.domain.exceptions import PaymentGatewayError
from core.settings.modules.payment_settings import PaymentSettings


logger = logging.getLogger(__name__)


class HttpPaymentGateway(IPaymentGateway):
    """
    REST client for the payment service.

    Endpoints:
    - GET  /api/payments/orders/{order_id}         (404 -> no payment)
    - POST /api/payments/orders/{order_id}/refund
    """

    def __init__(self, settings: PaymentSettings):
        self.settings = settings
        self.base_url = settings.service_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
        logger.info(f"HttpPaymentGateway initialized ({self.base_url})")

    async def get_payment_for_order(self, order_id: int) -> Optional[PaymentInfo]:
        url = f"{self.base_url}/api/payments/orders/{order_id}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url) as response:
                    if response.status == 404:
                        return None
                    if response.status != 200:
                        error_text = await response.text()
                        raise PaymentGatewayError(
                            f"Payment lookup failed for order {order_id}: "
                            f"{response.status} - {error_text}",
                            status_code=response.status,
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise PaymentGatewayError(f"Payment service unreachable: {e}") from e

        return PaymentInfo(
            order_id=order_id,
            status=self._status(data.get("status")),
            amount=Decimal(str(data.get("amount", "0"))),
            payment_id=data.get("payment_id"),
        )

    async def refund(self, order_id: int, reason: str) -> RefundInfo:
        url = f"{self.base_url}/api/payments/orders/{order_id}/refund"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(url, json={"reason": reason}) as response:
                    if response.status not in (200, 201):
                        error_text = await response.text()
                        raise PaymentGatewayError(
                            f"Refund failed for order {order_id}: {response.status} - {error_text}",
                            status_code=response.status,
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise PaymentGatewayError(f"Payment service unreachable: {e}") from e

        logger.info(f"Refund issued for order {order_id}")
        return RefundInfo(
            order_id=order_id,
            status=self._status(data.get("status", PaymentStatus.REFUNDED.value)),
            amount=Decimal(str(data.get("amount", "0"))),
            reason=reason,
        )

    @staticmethod
    def _status(raw) -> PaymentStatus:
        try:
            return PaymentStatus(str(raw).upper())
        except ValueError as e:
            raise PaymentGatewayError(f"Unknown payment status: {raw!r}") from e
