"""Courier entity."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..enums import CourierStatus, VehicleType
from ..value_objects import Coordinates


@dataclass
class Courier:
    """Independent courier that can claim PREPARING orders."""
    user_id: int
    name: str
    vehicle_type: VehicleType
    status: CourierStatus = CourierStatus.PENDING_APPROVAL
    email: Optional[str] = None
    phone: Optional[str] = None
    plate: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    id: Optional[int] = None

    @property
    def is_approved(self) -> bool:
        return self.status == CourierStatus.APPROVED

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def move_to(self, coordinates: Coordinates) -> None:
        self.latitude = coordinates.latitude
        self.longitude = coordinates.longitude
