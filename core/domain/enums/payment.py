"""Payment enums."""
from enum import Enum


class PaymentMethod(str, Enum):
    """How the client pays for an order."""

    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"
    CASH = "CASH"


class PaymentStatus(str, Enum):
    """Status reported by the payment gateway."""

    PENDING = "PENDING"
    AUTHORIZED = "AUTHORIZED"
    PAID = "PAID"
    REFUSED = "REFUSED"
    REFUNDED = "REFUNDED"

    @property
    def is_refundable(self) -> bool:
        return self in (PaymentStatus.PAID, PaymentStatus.AUTHORIZED)
