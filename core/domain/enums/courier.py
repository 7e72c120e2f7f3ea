"""Courier enums."""
from enum import Enum


class CourierStatus(str, Enum):
    """Approval/availability status of a courier."""

    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    UNAVAILABLE = "UNAVAILABLE"
    AVAILABLE = "AVAILABLE"


class VehicleType(str, Enum):
    """Vehicle used for deliveries (drives speed and routing profile)."""

    BICYCLE = "BICYCLE"
    MOTORCYCLE = "MOTORCYCLE"
    CAR = "CAR"

    @property
    def routing_profile(self) -> str:
        return "cycling" if self is VehicleType.BICYCLE else "driving"
