"""Application layer - services, interfaces, validators and DTOs."""

from .dtos import CreateOrderRequest, OrderDTO, OrderItemDTO
from .interfaces import INotificationService, IPaymentGateway, IRoutingService
from .services import (
    CartService,
    CouponService,
    DeliveryAssignmentService,
    FeeConfigurationService,
    OrderLifecycleService,
    SettlementService,
)

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "OrderDTO",
    "OrderItemDTO",
    # Services
    "CartService",
    "CouponService",
    "DeliveryAssignmentService",
    "FeeConfigurationService",
    "OrderLifecycleService",
    "SettlementService",
    # Interfaces
    "INotificationService",
    "IPaymentGateway",
    "IRoutingService",
]
