"""Application services."""
from .cart_service import CartService
from .coupon_service import CouponService
from .delivery_assignment_service import DeliveryAssignmentService
from .eta_estimator import EtaEstimator
from .fee_configuration_service import FeeConfigurationService
from .order_lifecycle_service import OrderLifecycleService
from .order_notification_handler import OrderNotificationHandler
from .settlement_service import OrderPricing, SettlementService

__all__ = [
    "CartService",
    "CouponService",
    "DeliveryAssignmentService",
    "EtaEstimator",
    "FeeConfigurationService",
    "OrderLifecycleService",
    "OrderNotificationHandler",
    "OrderPricing",
    "SettlementService",
]
