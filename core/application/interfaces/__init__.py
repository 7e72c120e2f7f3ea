"""Application layer interfaces."""
from .catalog import ICatalog
from .geocoding import IGeocodingService
from .notifications import INotificationService
from .payments import IPaymentGateway, PaymentInfo, RefundInfo
from .routing import IRoutingService, RouteResult
from .settlement import ICourierPositionTracker, IFeeRateProvider

__all__ = [
    "ICatalog",
    "ICourierPositionTracker",
    "IFeeRateProvider",
    "IGeocodingService",
    "INotificationService",
    "IPaymentGateway",
    "IRoutingService",
    "PaymentInfo",
    "RefundInfo",
    "RouteResult",
]
