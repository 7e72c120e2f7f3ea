"""Domain enumerations."""
from .actor_role import ActorRole
from .coupon import DiscountType
from .courier import CourierStatus, VehicleType
from .fee_category import FeeCategory
from .order_status import OrderStatus
from .payment import PaymentMethod, PaymentStatus

__all__ = [
    "ActorRole",
    "CourierStatus",
    "DiscountType",
    "FeeCategory",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "VehicleType",
]
