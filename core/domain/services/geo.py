"""
Great-circle distance and travel-time helpers.
"""
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..enums import VehicleType

EARTH_RADIUS_KM = 6371.0

BICYCLE_SPEED_KMH = 15
MOTOR_SPEED_KMH = 30

MIN_ETA_MINUTES = 1
MAX_ETA_MINUTES = 120


def haversine_km(
    origin_lat: Optional[Decimal],
    origin_lon: Optional[Decimal],
    dest_lat: Optional[Decimal],
    dest_lon: Optional[Decimal],
) -> Optional[Decimal]:
    """
    Straight-line distance between two points.

    Returns:
        Distance in km rounded to 2 places, or None if any coordinate is missing
    """
    if origin_lat is None or origin_lon is None or dest_lat is None or dest_lon is None:
        return None

    lat1 = math.radians(float(origin_lat))
    lat2 = math.radians(float(dest_lat))
    d_lat = math.radians(float(dest_lat) - float(origin_lat))
    d_lon = math.radians(float(dest_lon) - float(origin_lon))

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    distance = Decimal(str(EARTH_RADIUS_KM * c))
    return distance.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def average_speed_kmh(
    vehicle_type: Optional[VehicleType],
    bicycle_speed: int = BICYCLE_SPEED_KMH,
    motor_speed: int = MOTOR_SPEED_KMH,
) -> int:
    if vehicle_type is VehicleType.BICYCLE:
        return bicycle_speed
    return motor_speed


def travel_minutes(
    distance_km: Optional[Decimal],
    vehicle_type: Optional[VehicleType],
    bicycle_speed: int = BICYCLE_SPEED_KMH,
    motor_speed: int = MOTOR_SPEED_KMH,
    min_minutes: int = MIN_ETA_MINUTES,
    max_minutes: int = MAX_ETA_MINUTES,
) -> int:
    """
    Minutes needed to cover a distance at the vehicle's average speed.

    Rounded up to whole minutes and clamped to [min_minutes, max_minutes].
    A missing or non-positive distance yields 0.
    """
    if distance_km is None or distance_km <= 0:
        return 0

    speed = average_speed_kmh(vehicle_type, bicycle_speed, motor_speed)
    minutes = math.ceil(Decimal(distance_km) * 60 / Decimal(str(speed)))

    return max(min_minutes, min(max_minutes, minutes))
