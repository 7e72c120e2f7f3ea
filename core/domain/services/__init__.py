"""Pure domain services."""
from .coupon_resolver import calculate_discount, validate_applicable
from .geo import haversine_km, travel_minutes
from .monetary import money, net_value, platform_fee
from .order_access import OrderParties
from .polyline import decode_polyline

__all__ = [
    "OrderParties",
    "calculate_discount",
    "decode_polyline",
    "haversine_km",
    "money",
    "net_value",
    "platform_fee",
    "travel_minutes",
    "validate_applicable",
]
